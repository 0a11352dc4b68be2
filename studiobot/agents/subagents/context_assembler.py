"""
Context Assembler Subagent

Builds the message list sent to the completion API: the business system
prompt, the recent conversation history, then the new visitor message.
"""

from typing import Dict, List, Optional
import logging

from studiobot.agents.prompts import SYSTEM_PROMPT
from studiobot.models.message import MessageRole
from studiobot.services.conversation_service import ConversationService

logger = logging.getLogger(__name__)


class ContextAssembler:
    """
    Subagent for completion context assembly

    The system message is synthesized on every call and never stored.
    """

    def __init__(self, conversation_service: ConversationService, system_prompt: str = SYSTEM_PROMPT):
        self.conversations = conversation_service
        self.system_prompt = system_prompt

    def build_context(
        self,
        conversation_id: str,
        user_text: str,
        limit: int = 10,
        before_id: Optional[int] = None
    ) -> List[Dict[str, str]]:
        """
        Assemble the completion context for a conversation

        Args:
            conversation_id: Conversation id
            user_text: The message just received from the visitor
            limit: Maximum number of stored messages to include
            before_id: Exclude stored messages with this id or later

        Returns:
            At most limit + 2 role/content dicts in chronological order
        """
        recent = self.conversations.get_recent_messages(
            conversation_id,
            limit=limit,
            before_id=before_id
        )

        # Stored newest first
        history = [
            {"role": msg.role, "content": msg.content}
            for msg in reversed(recent)
        ]

        logger.info(f"Loaded {len(history)} history messages for conversation {conversation_id}")

        return [
            {"role": MessageRole.SYSTEM.value, "content": self.system_prompt},
            *history,
            {"role": MessageRole.USER.value, "content": user_text},
        ]
