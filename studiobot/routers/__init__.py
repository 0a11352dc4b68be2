"""Routers package for the studio chatbot."""

from .admin import router as admin_router
from .chat import router as chat_router

__all__ = ["admin_router", "chat_router"]
