import hashlib
import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

_logger = logging.getLogger("audit")


class WaitlistEvent(str, Enum):
    JOINED = "waitlist.joined"
    DUPLICATE = "waitlist.duplicate"
    PERSIST_FAILED = "waitlist.persist_failed"
    NOTIFY_SENT = "waitlist.notify_sent"
    NOTIFY_FAILED = "waitlist.notify_failed"
    NOTIFY_SKIPPED = "waitlist.notify_skipped"


def email_fingerprint(email: Optional[str]) -> Optional[str]:
    """Short stable SHA-256 prefix that lets audit lines be correlated without the address."""
    if not email:
        return None
    return hashlib.sha256(email.encode()).hexdigest()[:12]


def audit(event: WaitlistEvent, *, email: Optional[str] = None, **fields: Any) -> None:
    """Write one JSON line for a waitlist event. Unknown events raise ValueError."""
    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": WaitlistEvent(event).value,
    }
    fingerprint = email_fingerprint(email)
    if fingerprint:
        payload["subscriber"] = fingerprint
    payload.update(fields)
    _logger.info(json.dumps(payload, ensure_ascii=False, default=str))
