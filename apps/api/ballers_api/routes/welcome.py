"""Root route."""

from fastapi import APIRouter

from ballers_api.schemas.common import MessageResponse

router = APIRouter(tags=["Welcome"])


@router.get("/", response_model=MessageResponse)
async def welcome() -> MessageResponse:
    return MessageResponse(message="Welcome to Ballers API endpoint")
