import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import DatabaseError, DuplicateEmailError, UNIQUE_VIOLATION
from app.models.subscriber import Subscriber

logger = logging.getLogger(__name__)


def is_unique_violation(error: IntegrityError) -> bool:
    """True when the driver reports a unique-constraint violation."""
    orig = getattr(error, "orig", None)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == UNIQUE_VIOLATION
    # sqlite3 only reports it in the message
    return "UNIQUE constraint failed" in str(orig)


class SubscriberStorage:
    """Persists subscribers; uniqueness of email is left to the database."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def create_subscriber(self, email: str) -> Subscriber:
        db = self.session_factory()
        try:
            subscriber = Subscriber(email=email)
            db.add(subscriber)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if is_unique_violation(e):
                    raise DuplicateEmailError("Subscriber already exists", details=str(e.orig)) from e
                raise DatabaseError("Failed to create subscriber", details=str(e.orig)) from e
            except SQLAlchemyError as e:
                db.rollback()
                raise DatabaseError("Failed to create subscriber", details=str(e)) from e
            logger.debug(f"Created subscriber {subscriber.id}")
            return subscriber
        finally:
            db.close()
