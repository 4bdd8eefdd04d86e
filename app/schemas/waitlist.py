"""
Waitlist request/response contract shared by the API endpoint and the client.
"""
from typing import Any, Dict, Type

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

INVALID_EMAIL_MESSAGE = "Please enter a valid email address"


class WaitlistInput(BaseModel):
    email: str

    @field_validator("email", mode="before")
    @classmethod
    def email_must_be_valid(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise PydanticCustomError("invalid_email", INVALID_EMAIL_MESSAGE)
        # Taken verbatim; surrounding whitespace is invalid
        if value != value.strip():
            raise PydanticCustomError("invalid_email", INVALID_EMAIL_MESSAGE)
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("invalid_email", INVALID_EMAIL_MESSAGE)
        return value


class WaitlistJoinedResponse(BaseModel):
    success: bool
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    field: str


class InternalErrorResponse(BaseModel):
    message: str


class WaitlistJoinRoute:
    """Route descriptor for joining the waitlist."""
    method = "POST"
    path = "/api/waitlist"
    input: Type[BaseModel] = WaitlistInput
    responses: Dict[int, Type[BaseModel]] = {
        201: WaitlistJoinedResponse,
        400: ValidationErrorResponse,
        500: InternalErrorResponse,
    }
