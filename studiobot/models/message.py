"""
Message Model

Append-only log of chat messages. The autoincrement id defines the total
order of messages within and across conversations.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship, Column
from sqlalchemy import Text, String

if TYPE_CHECKING:
    from .conversation import Conversation


class MessageRole(str, Enum):
    """Message author role"""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"  # only injected into completion context, never stored


class Message(SQLModel, table=True):
    """
    Individual chat message.

    Relationships:
    - Belongs to one Conversation

    ip and ua are empty strings for assistant-authored messages.
    """
    __tablename__ = "messages"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    conv_id: str = Field(foreign_key="conversations.id", index=True, max_length=64)
    role: str = Field(sa_column=Column(String(16), nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    ip: str = Field(default="", sa_column=Column(String(255), nullable=False, default=""))
    ua: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    conversation: Optional["Conversation"] = Relationship(back_populates="messages")
