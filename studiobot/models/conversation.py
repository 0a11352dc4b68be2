"""
Conversation Model

One row per visitor conversation. The id is the opaque value carried in the
conversation cookie. Rows are created once and never updated or deleted.
"""

from datetime import datetime, timezone
from typing import List, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from .message import Message


class Conversation(SQLModel, table=True):
    """
    Conversation identity record.

    Relationships:
    - Has many Messages
    """
    __tablename__ = "conversations"

    id: str = Field(primary_key=True, max_length=64)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    messages: List["Message"] = Relationship(
        back_populates="conversation",
        sa_relationship_kwargs={"lazy": "select"}
    )
