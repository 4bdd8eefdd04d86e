"""
Process-level wiring: builds the database engine and the waitlist adapters once
and hands them to request handlers.
"""
import asyncio
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.database import create_db_engine, create_session_factory, create_tables
from app.services.email_service import EmailService
from app.services.subscriber_storage import SubscriberStorage
from app.services.waitlist_service import WaitlistService

logger = logging.getLogger(__name__)


class Container:
    def __init__(self, engine: Engine, session_factory: sessionmaker, waitlist_service: WaitlistService):
        self.engine = engine
        self.session_factory = session_factory
        self.waitlist_service = waitlist_service


class Bootstrapper:
    """Idempotent initialisation guard.

    Every caller of ensure_ready() awaits the same task, so concurrent first
    requests trigger a single initialisation. A failed attempt is discarded
    and the next call starts over.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.container: Optional[Container] = None
        self.init_count = 0
        self._task: Optional[asyncio.Task] = None

    async def ensure_ready(self) -> Container:
        if self.container is not None:
            return self.container
        if self._task is None:
            self._task = asyncio.ensure_future(self._initialize())
        task = self._task
        try:
            return await asyncio.shield(task)
        except Exception:
            if self._task is task:
                self._task = None
            raise

    async def _initialize(self) -> Container:
        self.init_count += 1
        settings = self.settings
        engine = create_db_engine(settings.DATABASE_URL)
        if settings.AUTO_CREATE_TABLES:
            await asyncio.to_thread(create_tables, engine)
        session_factory = create_session_factory(engine)

        email = EmailService.from_settings(settings)
        if email is None:
            if not settings.RESEND_API_KEY:
                logger.info("[INFO] Resend not configured - add RESEND_API_KEY to enable email notifications")
            else:
                logger.info("[INFO] SECRET_RECIPIENT_MAIL not set - email notifications disabled")

        service = WaitlistService(
            storage=SubscriberStorage(session_factory),
            email=email,
            email_timeout=settings.EMAIL_TIMEOUT_SECONDS,
        )
        self.container = Container(engine, session_factory, service)
        logger.info("🪴 Waitlist backend initialised")
        return self.container

    def dispose(self) -> None:
        if self.container is not None:
            self.container.engine.dispose()
            self.container = None
            self._task = None
