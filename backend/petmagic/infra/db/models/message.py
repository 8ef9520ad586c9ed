"""Chat message database model."""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text

from petmagic.domain.common.types import utcnow
from petmagic.domain.conversations.models import Message as MessageEntity
from petmagic.infra.db.base import Base


class MessageModel(Base):
    """1:1 message. conversation_key is the sorted participant pair; sequence orders it."""

    __tablename__ = "messages"

    id = Column(String, primary_key=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    conversation_key = Column(String, nullable=False)
    sequence = Column(Integer, nullable=False)  # per-conversation increment for ordering
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (Index("ix_messages_conversation_sequence", "conversation_key", "sequence", unique=True),)

    def to_entity(self) -> MessageEntity:
        """Convert to domain entity."""
        return MessageEntity(
            id=self.id,
            sender_id=self.sender_id,
            receiver_id=self.receiver_id,
            content=self.content,
            sequence=self.sequence,
            created_at=self.created_at,
        )
