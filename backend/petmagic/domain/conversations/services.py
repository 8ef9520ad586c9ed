"""1:1 chat: send, fetch a conversation, list counterpart threads."""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.errors import ConflictError, NotFoundError, ValidationError
from petmagic.domain.conversations.models import Message, Thread
from petmagic.infra.db.repositories.message_repo import MessageRepository
from petmagic.infra.db.repositories.user_repo import UserRepository
from petmagic.infra.db.session import transaction

logger = logging.getLogger(__name__)

# Concurrent senders can race for the same next sequence; the unique index rejects the loser.
SEND_ATTEMPTS = 3
SEQUENCE_CONFLICT_MESSAGE = "Conversation is busy, please retry"


class ConversationService:
    """Conversation service."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.messages = MessageRepository(db)
        self.users = UserRepository(db)

    async def send_message(
        self, sender_id: Optional[int], receiver_id: Optional[int], content: Optional[str]
    ) -> Message:
        """Persist a message from sender to receiver."""
        missing = [
            name
            for name, value in (("senderId", sender_id), ("receiverId", receiver_id), ("content", content))
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(f"Missing required fields for message: {', '.join(missing)}")
        if sender_id == receiver_id:
            raise ValidationError("Cannot send a message to yourself")

        known = await self.users.exist([sender_id, receiver_id])
        for user_id in (sender_id, receiver_id):
            if user_id not in known:
                raise NotFoundError("User", user_id)

        for attempt in range(1, SEND_ATTEMPTS + 1):
            try:
                async with transaction(self.db, conflict_message=SEQUENCE_CONFLICT_MESSAGE):
                    message = await self.messages.append(sender_id, receiver_id, content)
                break
            except ConflictError:
                if attempt == SEND_ATTEMPTS:
                    raise
                logger.warning(
                    "Sequence collision sending %s -> %s (attempt %d), retrying",
                    sender_id, receiver_id, attempt,
                )
        logger.info("Message %s sent %s -> %s", message.id, sender_id, receiver_id)
        return message

    async def fetch_conversation(
        self, user_a: int, user_b: int, after_sequence: Optional[int] = None
    ) -> list[Message]:
        """Messages exchanged between user_a and user_b in either direction, oldest first."""
        return await self.messages.list_conversation(user_a, user_b, after_sequence=after_sequence)

    async def list_threads(self, user_id: int) -> list[Thread]:
        """Distinct counterparts user_id has exchanged messages with."""
        return await self.messages.list_threads(user_id)
