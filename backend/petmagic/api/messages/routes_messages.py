"""1:1 chat API routes: send, conversation history, threads."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from petmagic.api.deps import get_conversation_service
from petmagic.api.schemas import Ack, CamelModel, MessageResponse, ThreadResponse
from petmagic.domain.conversations.services import ConversationService

router = APIRouter()


class SendMessageRequest(CamelModel):
    sender_id: Optional[int] = None
    receiver_id: Optional[int] = None
    content: Optional[str] = None


@router.post("", response_model=Ack, status_code=status.HTTP_201_CREATED)
async def send_message(
    request: SendMessageRequest,
    service: ConversationService = Depends(get_conversation_service),
):
    """Send a message from senderId to receiverId."""
    message = await service.send_message(request.sender_id, request.receiver_id, request.content)
    return Ack(message="Message sent", id=message.id)


# Must be registered before /{user_a}/{user_b}, which would otherwise match "threads/<id>".
@router.get("/threads/{user_id}", response_model=List[ThreadResponse])
async def list_threads(
    user_id: int,
    service: ConversationService = Depends(get_conversation_service),
):
    """One entry per counterpart user_id has exchanged messages with."""
    threads = await service.list_threads(user_id)
    return [ThreadResponse.model_validate(t) for t in threads]


@router.get("/{user_a}/{user_b}", response_model=List[MessageResponse])
async def fetch_conversation(
    user_a: int,
    user_b: int,
    after_sequence: Optional[int] = Query(None, alias="afterSequence"),
    service: ConversationService = Depends(get_conversation_service),
):
    """Messages between user_a and user_b in both directions, oldest first."""
    messages = await service.fetch_conversation(user_a, user_b, after_sequence=after_sequence)
    return [MessageResponse.model_validate(m) for m in messages]
