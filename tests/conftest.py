import os

# Set up test environment before app.core.config loads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("SECRET_RECIPIENT_MAIL", None)

import time

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.deps import get_waitlist_service
from app.core.exceptions import DatabaseError
from app.models.subscriber import Subscriber
from app.services.subscriber_storage import SubscriberStorage
from app.services.waitlist_service import WaitlistService
from main import create_app


class RecordingEmail:
    """Stands in for EmailService and remembers who it was asked to announce."""
    def __init__(self, result=True):
        self.result = result
        self.sent = []

    def notify_signup(self, email):
        self.sent.append(email)
        return self.result


class ExplodingEmail:
    def notify_signup(self, email):
        raise RuntimeError("provider unreachable")


class SlowEmail:
    def __init__(self, delay):
        self.delay = delay
        self.sent = []

    def notify_signup(self, email):
        time.sleep(self.delay)
        self.sent.append(email)
        return True


class BrokenStorage:
    def create_subscriber(self, email):
        raise DatabaseError("Failed to create subscriber", details="connection reset")


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        AUTO_CREATE_TABLES=True,
        RESEND_API_KEY=None,
        SECRET_RECIPIENT_MAIL=None,
        EMAIL_TIMEOUT_SECONDS=0.2,
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def wire(app):
    """Swap the waitlist service's collaborators while keeping the app's database."""
    def _wire(email=None, storage=None, email_timeout=0.2):
        async def override():
            container = await app.state.bootstrapper.ensure_ready()
            return WaitlistService(
                storage=storage or SubscriberStorage(container.session_factory),
                email=email,
                email_timeout=email_timeout,
            )
        app.dependency_overrides[get_waitlist_service] = override
    return _wire


@pytest.fixture
def client_for():
    def _client_for(app):
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    return _client_for


def stored_emails(session_factory):
    db = session_factory()
    try:
        return [row.email for row in db.query(Subscriber).order_by(Subscriber.id)]
    finally:
        db.close()


async def count_subscribers(app, email):
    container = await app.state.bootstrapper.ensure_ready()
    return stored_emails(container.session_factory).count(email)
