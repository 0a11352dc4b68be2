"""
Main Chat Agent

Coordinates the intent skill, context assembly and the completion client to
answer one visitor message, persisting both sides of the exchange.
"""

from dataclasses import dataclass
from typing import Optional
import asyncio
import logging

from studiobot.agents.prompts import EMPTY_COMPLETION_REPLY, EMPTY_MESSAGE_REPLY
from studiobot.agents.skills.intent_matching import IntentMatchingSkill, intent_matching_skill
from studiobot.agents.subagents.completion_client import CompletionClient
from studiobot.agents.subagents.context_assembler import ContextAssembler
from studiobot.models.message import MessageRole
from studiobot.services.conversation_service import ConversationService
from studiobot.utils.logger import chat_logger

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    """Outcome of one chat turn"""
    reply: str
    source: str  # "empty", "canned" or "completion"
    intent: Optional[str] = None


class StudioChatAgent:
    """
    Main orchestrator for the studio chatbot

    Responsibilities:
    - Persist the visitor message before any reply is computed
    - Answer known intents from canned replies
    - Fall back to the completion client with a bounded context window
    - Persist the assistant reply only when one was produced
    """

    def __init__(
        self,
        conversation_service: ConversationService,
        completion_client: CompletionClient,
        intent_skill: IntentMatchingSkill = intent_matching_skill,
        context_limit: int = 10,
        max_message_length: int = 2000,
        completion_timeout: Optional[float] = 30.0
    ):
        self.conversations = conversation_service
        self.completion_client = completion_client
        self.intents = intent_skill
        self.context = ContextAssembler(conversation_service)
        self.context_limit = context_limit
        self.max_message_length = max_message_length
        self.completion_timeout = completion_timeout

    async def process_message(
        self,
        conversation_id: str,
        message: Optional[str],
        ip: str = "",
        ua: str = ""
    ) -> ChatResult:
        """
        Process a visitor message and produce the reply

        Args:
            conversation_id: Resolved conversation id
            message: Raw visitor text
            ip: Requester address
            ua: Requester user-agent

        Returns:
            ChatResult with the reply text

        Raises:
            CompletionError, asyncio.TimeoutError: If the completion call fails
            SQLAlchemyError: If the store fails
        """
        if not message or not message.strip():
            logger.debug(f"Empty message for conversation {conversation_id}, nothing stored")
            return ChatResult(reply=EMPTY_MESSAGE_REPLY, source="empty")

        text = message[:self.max_message_length]

        self.conversations.ensure_conversation(conversation_id)
        user_message = self.conversations.add_message(
            conversation_id=conversation_id,
            role=MessageRole.USER,
            content=text,
            ip=ip,
            ua=ua
        )

        rule = self.intents.match_rule(text)
        if rule:
            self.conversations.add_message(
                conversation_id=conversation_id,
                role=MessageRole.ASSISTANT,
                content=rule.reply
            )
            chat_logger.info("canned reply", conversation_id=conversation_id, intent=rule.name)
            return ChatResult(reply=rule.reply, source="canned", intent=rule.name)

        messages = self.context.build_context(
            conversation_id,
            text,
            limit=self.context_limit,
            before_id=user_message.id
        )

        raw_reply = await asyncio.wait_for(
            self.completion_client.complete(messages),
            timeout=self.completion_timeout
        )
        reply = (raw_reply or "").strip() or EMPTY_COMPLETION_REPLY

        self.conversations.add_message(
            conversation_id=conversation_id,
            role=MessageRole.ASSISTANT,
            content=reply
        )
        chat_logger.info(
            "completion reply",
            conversation_id=conversation_id,
            context_size=len(messages),
            reply_length=len(reply)
        )
        return ChatResult(reply=reply, source="completion")
