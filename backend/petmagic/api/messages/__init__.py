"""Messages API."""
from fastapi import APIRouter

from petmagic.api.messages import routes_messages

router = APIRouter()

router.include_router(routes_messages.router, prefix="/messages", tags=["messages"])
