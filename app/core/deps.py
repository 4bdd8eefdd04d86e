from fastapi import Request

from app.services.waitlist_service import WaitlistService


async def get_waitlist_service(request: Request) -> WaitlistService:
    container = await request.app.state.bootstrapper.ensure_ready()
    return container.waitlist_service
