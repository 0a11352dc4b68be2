"""
Conversation Service

Persistence for conversations and their append-only message log.
"""

from typing import List, Optional
from datetime import datetime, timezone
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from studiobot.models.conversation import Conversation
from studiobot.models.message import Message, MessageRole

logger = logging.getLogger(__name__)


class ConversationService:
    """Service for managing conversations and messages"""

    def __init__(self, db: Session):
        self.db = db

    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self.db.get(Conversation, conversation_id)

    def ensure_conversation(self, conversation_id: str) -> Conversation:
        """
        Return the conversation, inserting it first if it does not exist.

        Calling this repeatedly with the same id never creates a second row.
        """
        conversation = self.get_conversation(conversation_id)
        if conversation:
            return conversation

        conversation = Conversation(id=conversation_id, created_at=datetime.now(timezone.utc))
        self.db.add(conversation)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request inserted the same id first
            self.db.rollback()
            logger.debug(f"Conversation {conversation_id} already created concurrently")
            return self.get_conversation(conversation_id)

        self.db.refresh(conversation)
        logger.info(f"Created conversation {conversation_id}")
        return conversation

    def add_message(
        self,
        conversation_id: str,
        role: MessageRole,
        content: str,
        ip: str = "",
        ua: str = ""
    ) -> Message:
        """Append a message to a conversation"""
        message = Message(
            conv_id=conversation_id,
            role=role.value,
            content=content,
            ip=ip or "",
            ua=ua or "",
            created_at=datetime.now(timezone.utc)
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def get_recent_messages(
        self,
        conversation_id: str,
        limit: int = 10,
        before_id: Optional[int] = None
    ) -> List[Message]:
        """
        Get the most recent messages of a conversation, newest first.

        Args:
            conversation_id: Conversation id
            limit: Maximum number of messages
            before_id: Only consider messages with a smaller id

        Returns:
            Messages in descending id order
        """
        if limit <= 0:
            return []

        statement = select(Message).where(Message.conv_id == conversation_id)
        if before_id is not None:
            statement = statement.where(Message.id < before_id)
        statement = statement.order_by(Message.id.desc()).limit(limit)

        return list(self.db.exec(statement).all())

    def get_messages(self, conversation_id: str) -> List[Message]:
        """Get every message of a conversation in chronological order"""
        statement = select(Message).where(
            Message.conv_id == conversation_id
        ).order_by(Message.id)

        return list(self.db.exec(statement).all())

    def get_all_messages(self) -> List[Message]:
        """Get the full message log ordered by id ascending"""
        return list(self.db.exec(select(Message).order_by(Message.id)).all())
