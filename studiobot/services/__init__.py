"""Persistence and export services."""

from .conversation_service import ConversationService
from .export_service import messages_to_csv

__all__ = ["ConversationService", "messages_to_csv"]
