from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

# Load environment variables before settings are read
load_dotenv()

from app.api.api import api_router
from app.core.bootstrap import Bootstrapper
from app.core.config import Settings, settings
from app.core.exceptions import (
    DatabaseError,
    database_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Configure audit logger (JSON lines)
    audit_logger = logging.getLogger("audit")
    if not audit_logger.handlers:
        handler = logging.StreamHandler()
        # Keep raw JSON line without extra prefixes
        handler.setFormatter(logging.Formatter("%(message)s"))
        audit_logger.addHandler(handler)
    audit_logger.setLevel(logging.INFO)
    # Do not propagate to root to avoid duplication
    audit_logger.propagate = False


def create_app(app_settings: Settings = None) -> FastAPI:
    app_settings = app_settings or settings
    bootstrapper = Bootstrapper(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await bootstrapper.ensure_ready()
        except Exception as e:
            # Requests retry initialisation through the middleware
            logger.error(f"⚠️ Startup initialisation failed: {e}")
        yield
        bootstrapper.dispose()

    app = FastAPI(
        title="Anveshan Waitlist API",
        description="Waitlist signups for the Anveshan identity platform",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.bootstrapper = bootstrapper

    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Serverless hosts may never run lifespan; make sure wiring exists first
    @app.middleware("http")
    async def ensure_initialised(request: Request, call_next):
        await request.app.state.bootstrapper.ensure_ready()
        return await call_next(request)

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(DatabaseError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": "Anveshan Waitlist API is running"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


configure_logging(settings.DEBUG)
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
