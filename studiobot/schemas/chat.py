from typing import List, Optional
from pydantic import BaseModel


class ChatRequest(BaseModel):
    """Chat request schema. A missing message is treated as empty."""
    message: Optional[str] = None


class ChatResponse(BaseModel):
    reply: str


class MessageItem(BaseModel):
    role: str
    content: str
    created_at: str


class ConversationHistoryResponse(BaseModel):
    conversation_id: Optional[str] = None
    messages: List[MessageItem]
