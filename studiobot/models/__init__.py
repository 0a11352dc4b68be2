"""SQLModel table definitions."""

from .conversation import Conversation
from .message import Message, MessageRole

__all__ = ["Conversation", "Message", "MessageRole"]
