"""
Async client for the waitlist endpoint plus the signup form state that sits
on top of it.
"""
import logging
from typing import Callable, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.schemas.waitlist import WaitlistJoinRoute, WaitlistJoinedResponse

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to join waitlist"
DEFAULT_SUCCESS_DESCRIPTION = "We'll notify you when Stable Alpha V.2 launches."

Toast = Callable[..., None]


class WaitlistClientError(Exception):
    """Raised when the server rejects a signup."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class WaitlistClient:
    def __init__(self, http_client: httpx.AsyncClient):
        self.http = http_client

    def validate(self, email: str) -> dict:
        try:
            payload = WaitlistJoinRoute.input.model_validate({"email": email})
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or "email"
            raise ValidationError(first["msg"], field=field) from e
        return payload.model_dump()

    async def join(self, email: str) -> WaitlistJoinedResponse:
        body = self.validate(email)
        response = await self.http.request(WaitlistJoinRoute.method, WaitlistJoinRoute.path, json=body)

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            message = data.get("message") if isinstance(data, dict) else None
            raise WaitlistClientError(message or DEFAULT_ERROR_MESSAGE, status_code=response.status_code)

        return WaitlistJoinRoute.responses[201].model_validate(data)


def log_toast(title: str, description: str, variant: str = "default") -> None:
    level = logging.ERROR if variant == "destructive" else logging.INFO
    logger.log(level, f"{title}: {description}")


class WaitlistSignupForm:
    """Holds the email input and reports each submission through a toast."""

    def __init__(self, client: WaitlistClient, toast: Toast = log_toast):
        self.client = client
        self.toast = toast
        self.email = ""

    async def submit(self) -> Optional[WaitlistJoinedResponse]:
        try:
            result = await self.client.join(self.email)
        except (ValidationError, WaitlistClientError) as e:
            self.toast(title="Error", description=e.message, variant="destructive")
            return None

        self.email = ""
        self.toast(title="You're in!", description=result.message or DEFAULT_SUCCESS_DESCRIPTION)
        return result
