import asyncio
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.core.exceptions import DatabaseError, DuplicateEmailError
from app.schemas.waitlist import WaitlistJoinedResponse
from app.services.email_service import EmailService
from app.services.subscriber_storage import SubscriberStorage
from app.utils.audit import WaitlistEvent, audit

logger = logging.getLogger(__name__)

JOINED_MESSAGE = "You're on the list!"
ALREADY_JOINED_MESSAGE = "You're already on the list!"


class WaitlistService:
    """Persist a signup, then notify the team without letting email affect the outcome."""

    def __init__(
        self,
        storage: SubscriberStorage,
        email: Optional[EmailService] = None,
        email_timeout: float = 5.0,
    ):
        self.storage = storage
        self.email = email
        self.email_timeout = email_timeout

    async def join(self, email: str) -> WaitlistJoinedResponse:
        try:
            subscriber = await run_in_threadpool(self.storage.create_subscriber, email)
        except DuplicateEmailError:
            # Duplicates look like success so we never reveal who signed up
            audit(WaitlistEvent.DUPLICATE, email=email)
            return WaitlistJoinedResponse(success=True, message=ALREADY_JOINED_MESSAGE)
        except DatabaseError as e:
            audit(WaitlistEvent.PERSIST_FAILED, email=email, error=e.message)
            raise

        audit(WaitlistEvent.JOINED, email=email, subscriber_id=subscriber.id)
        await self.notify(subscriber.email)
        return WaitlistJoinedResponse(success=True, message=JOINED_MESSAGE)

    async def notify(self, email: str) -> bool:
        if self.email is None:
            logger.info(f"[WAITLIST] New signup: {email}")
            audit(WaitlistEvent.NOTIFY_SKIPPED, email=email)
            return False

        try:
            sent = await asyncio.wait_for(
                asyncio.to_thread(self.email.notify_signup, email),
                timeout=self.email_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Email notification timed out after {self.email_timeout}s")
            sent = False
        except Exception as e:
            logger.error(f"Email notification failed: {e}")
            sent = False

        audit(WaitlistEvent.NOTIFY_SENT if sent else WaitlistEvent.NOTIFY_FAILED, email=email)
        return sent
