import pytest
from sqlalchemy.exc import IntegrityError

from app.core.database import create_db_engine, create_session_factory, create_tables
from app.core.exceptions import DatabaseError, DuplicateEmailError
from app.services.subscriber_storage import SubscriberStorage, is_unique_violation
from conftest import stored_emails


@pytest.fixture
def storage():
    engine = create_db_engine("sqlite://")
    create_tables(engine)
    yield SubscriberStorage(create_session_factory(engine))
    engine.dispose()


def test_create_assigns_increasing_ids(storage):
    first = storage.create_subscriber("a@example.com")
    second = storage.create_subscriber("b@example.com")
    assert first.email == "a@example.com"
    assert second.id > first.id


def test_created_subscriber_is_usable_after_session_closes(storage):
    subscriber = storage.create_subscriber("Mixed.Case@Example.com")
    assert isinstance(subscriber.id, int)
    assert subscriber.email == "Mixed.Case@Example.com"
    assert stored_emails(storage.session_factory) == ["Mixed.Case@Example.com"]


def test_duplicate_email_raises_conflict(storage):
    storage.create_subscriber("a@example.com")
    with pytest.raises(DuplicateEmailError) as exc_info:
        storage.create_subscriber("a@example.com")
    assert exc_info.value.code == "23505"
    assert stored_emails(storage.session_factory) == ["a@example.com"]


def test_storage_usable_after_conflict(storage):
    storage.create_subscriber("a@example.com")
    with pytest.raises(DuplicateEmailError):
        storage.create_subscriber("a@example.com")
    assert storage.create_subscriber("b@example.com").id is not None


def test_missing_table_raises_database_error():
    engine = create_db_engine("sqlite://")
    storage = SubscriberStorage(create_session_factory(engine))
    with pytest.raises(DatabaseError) as exc_info:
        storage.create_subscriber("a@example.com")
    assert not isinstance(exc_info.value, DuplicateEmailError)
    engine.dispose()


class _DriverError(Exception):
    def __init__(self, message, pgcode=None, sqlstate=None):
        super().__init__(message)
        self.pgcode = pgcode
        self.sqlstate = sqlstate


@pytest.mark.parametrize("orig, expected", [
    (_DriverError("duplicate key", pgcode="23505"), True),
    (_DriverError("duplicate key", sqlstate="23505"), True),
    (_DriverError("null value in column", pgcode="23502"), False),
    (_DriverError("UNIQUE constraint failed: subscribers.email"), True),
    (_DriverError("NOT NULL constraint failed: subscribers.email"), False),
])
def test_is_unique_violation(orig, expected):
    error = IntegrityError("INSERT INTO subscribers ...", {}, orig)
    assert is_unique_violation(error) is expected
