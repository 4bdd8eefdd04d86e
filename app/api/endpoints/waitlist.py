from fastapi import APIRouter, Depends

from app.core.deps import get_waitlist_service
from app.schemas.waitlist import (
    InternalErrorResponse,
    ValidationErrorResponse,
    WaitlistInput,
    WaitlistJoinRoute,
    WaitlistJoinedResponse,
)
from app.services.waitlist_service import WaitlistService

router = APIRouter(tags=["waitlist"])


@router.post(
    WaitlistJoinRoute.path,
    response_model=WaitlistJoinedResponse,
    status_code=201,
    responses={
        400: {"model": ValidationErrorResponse},
        500: {"model": InternalErrorResponse},
    },
)
async def join_waitlist(payload: WaitlistInput, service: WaitlistService = Depends(get_waitlist_service)):
    """Add an email to the waitlist. Repeat signups are reported as success.

    Storage failures other than a duplicate email propagate as DatabaseError
    and are turned into a generic 500 by the app's exception handler.
    """
    return await service.join(payload.email)
