"""1:1 message repository: append, pair history, counterpart threads."""
from typing import Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.types import conversation_key, generate_id, utcnow
from petmagic.domain.conversations.models import Message, Thread
from petmagic.infra.db.models.message import MessageModel
from petmagic.infra.db.models.user import UserModel


async def _next_sequence(session: AsyncSession, key: str) -> int:
    """Return next per-conversation sequence (caller must use within same transaction)."""
    result = await session.execute(
        select(func.coalesce(func.max(MessageModel.sequence), 0) + 1).where(
            MessageModel.conversation_key == key
        )
    )
    return result.scalar() or 1


class MessageRepository:
    """Message repository. Writes are flushed; the caller owns the commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, sender_id: int, receiver_id: int, content: str) -> Message:
        """Append a message to the sender/receiver conversation."""
        key = conversation_key(sender_id, receiver_id)
        model = MessageModel(
            id=generate_id(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            conversation_key=key,
            sequence=await _next_sequence(self.session, key),
            content=content,
            created_at=utcnow(),
        )
        self.session.add(model)
        await self.session.flush()
        return model.to_entity()

    async def list_conversation(
        self, user_a: int, user_b: int, after_sequence: Optional[int] = None
    ) -> list[Message]:
        """All messages between two users in either direction, oldest first."""
        q = (
            select(MessageModel)
            .where(MessageModel.conversation_key == conversation_key(user_a, user_b))
            .order_by(MessageModel.created_at.asc(), MessageModel.sequence.asc())
        )
        if after_sequence is not None:
            q = q.where(MessageModel.sequence > after_sequence)
        result = await self.session.execute(q)
        return [m.to_entity() for m in result.scalars().all()]

    async def list_threads(self, user_id: int) -> list[Thread]:
        """One row per distinct counterpart of user_id, most recent conversation first."""
        counterpart = case(
            (MessageModel.sender_id == user_id, MessageModel.receiver_id),
            else_=MessageModel.sender_id,
        ).label("counterpart_id")
        last_at = func.max(MessageModel.created_at).label("last_message_at")
        pairs = (
            select(counterpart, last_at)
            .where((MessageModel.sender_id == user_id) | (MessageModel.receiver_id == user_id))
            .group_by(counterpart)
            .subquery()
        )
        result = await self.session.execute(
            select(pairs.c.counterpart_id, UserModel.name, UserModel.profile_image, pairs.c.last_message_at)
            .join(UserModel, UserModel.id == pairs.c.counterpart_id)
            .order_by(pairs.c.last_message_at.desc(), pairs.c.counterpart_id.asc())
        )
        return [
            Thread(
                counterpart_id=row.counterpart_id,
                name=row.name,
                profile_image=row.profile_image,
                last_message_at=row.last_message_at,
            )
            for row in result.all()
        ]
