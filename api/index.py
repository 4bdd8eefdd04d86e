"""
Serverless entry point. The platform imports `app` and drives it per request;
initialisation happens on the first request through the app's init guard.
"""
from main import app

__all__ = ["app"]
