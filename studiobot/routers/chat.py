"""
Chat API Router

Visitor-facing conversational endpoint. The conversation is identified by an
opaque id kept in a cookie; every exchange is persisted.
"""

import asyncio
import logging
import re
from typing import Optional, Tuple
from uuid import uuid4

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from studiobot.agents.main_agent import StudioChatAgent
from studiobot.agents.subagents.completion_client import CompletionError
from studiobot.config import Settings
from studiobot.db.config import get_session
from studiobot.schemas.chat import (
    ChatRequest,
    ChatResponse,
    ConversationHistoryResponse,
    MessageItem,
)
from studiobot.services.conversation_service import ConversationService
from studiobot.utils.logger import chat_logger

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

CONVERSATION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
SERVER_ERROR_BODY = {"error": "server_error"}


def app_settings(request: Request) -> Settings:
    return request.app.state.settings


def read_conversation_id(request: Request, settings: Settings) -> Optional[str]:
    """Return the cookie's conversation id if present and well-formed"""
    value = request.cookies.get(settings.conversation_cookie)
    if value and CONVERSATION_ID_PATTERN.match(value):
        return value
    return None


def set_conversation_cookie(response: Response, conversation_id: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.conversation_cookie,
        value=conversation_id,
        max_age=settings.cookie_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def resolve_conversation_id(request: Request, response: Response, settings: Settings) -> Tuple[str, bool]:
    """
    Read the conversation id from the cookie, or mint a new one and set it
    on the response.

    Returns:
        (conversation_id, created)
    """
    conversation_id = read_conversation_id(request, settings)
    if conversation_id:
        return conversation_id, False

    conversation_id = uuid4().hex
    set_conversation_cookie(response, conversation_id, settings)
    return conversation_id, True


def server_error(conversation_id: Optional[str], created: bool, settings: Settings) -> JSONResponse:
    """
    Generic 500 body. A freshly minted conversation id is still sent, since
    the visitor message may already be stored under it.
    """
    error_response = JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=SERVER_ERROR_BODY)
    if created and conversation_id:
        set_conversation_cookie(error_response, conversation_id, settings)
    return error_response


def client_address(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer"""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else ""


@router.post("/chat", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    request: Request,
    response: Response,
    settings: Settings = Depends(app_settings),
    db: Session = Depends(get_session)
):
    """
    Answer one visitor message.

    Request flow:
    1. Resolve the conversation id from the cookie (or create one)
    2. Persist the visitor message
    3. Reply from a canned intent, or from the completion API
    4. Persist the assistant reply and return it

    Any failure returns a 500 with a generic error body; a failed completion
    leaves no assistant row behind.
    """
    conversation_id: Optional[str] = None
    created = False
    try:
        conversation_id, created = resolve_conversation_id(request, response, settings)

        agent = StudioChatAgent(
            conversation_service=ConversationService(db),
            completion_client=request.app.state.completion_client,
            context_limit=settings.context_limit,
            max_message_length=settings.max_message_length,
            completion_timeout=settings.completion_timeout,
        )
        result = await agent.process_message(
            conversation_id=conversation_id,
            message=payload.message,
            ip=client_address(request),
            ua=request.headers.get("user-agent", ""),
        )

        chat_logger.info(
            "chat request processed",
            conversation_id=conversation_id,
            new_conversation=created,
            source=result.source,
        )
        return ChatResponse(reply=result.reply)

    except (CompletionError, asyncio.TimeoutError) as e:
        chat_logger.exception("completion failed", error=repr(e))
        return server_error(conversation_id, created, settings)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Chat store error: {str(e)}", exc_info=True)
        return server_error(conversation_id, created, settings)
    except Exception as e:
        logger.error(f"Chat endpoint error: {str(e)}", exc_info=True)
        return server_error(conversation_id, created, settings)


@router.get("/chat/history", response_model=ConversationHistoryResponse)
async def chat_history(
    request: Request,
    settings: Settings = Depends(app_settings),
    db: Session = Depends(get_session)
):
    """
    Get the messages of the caller's conversation, oldest first.

    Returns an empty list when the request carries no conversation cookie.
    """
    conversation_id = read_conversation_id(request, settings)
    if not conversation_id:
        return ConversationHistoryResponse(conversation_id=None, messages=[])

    messages = ConversationService(db).get_messages(conversation_id)
    return ConversationHistoryResponse(
        conversation_id=conversation_id,
        messages=[
            MessageItem(
                role=msg.role,
                content=msg.content,
                created_at=msg.created_at.isoformat()
            )
            for msg in messages
        ]
    )
