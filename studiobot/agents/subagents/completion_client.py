"""
Completion Client Subagent

Wraps the hosted language model behind a one-method interface so the chat
agent can be driven by a stub in tests.
"""

from typing import Dict, List, Optional, Protocol
import logging

import cohere

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion API cannot produce a reply"""
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class CompletionClient(Protocol):
    """Turns an ordered list of role/content messages into one reply"""

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        ...


class CohereCompletionClient:
    """
    Completion client backed by Cohere's chat API

    Responsibilities:
    - Send the assembled context with the configured model and temperature
    - Extract the reply text from the response
    - Convert every upstream failure into CompletionError
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "command-r-plus-08-2024",
        temperature: float = 0.4,
        client: Optional[cohere.AsyncClientV2] = None
    ):
        self.model = model
        self.temperature = temperature

        if client is not None:
            self.client = client
            self.enabled = True
        elif api_key:
            self.client = cohere.AsyncClientV2(api_key=api_key)
            self.enabled = True
            logger.info(f"Cohere completion client initialized with model: {self.model}")
        else:
            self.client = None
            self.enabled = False
            logger.warning("Cohere completion client disabled - COHERE_API_KEY not set")

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Request a chat completion

        Args:
            messages: Role-tagged messages, system prompt first

        Returns:
            Reply text as returned by the model (may be empty)

        Raises:
            CompletionError: If the client is disabled, the call fails, or the
                response carries no text
        """
        if not self.enabled:
            raise CompletionError("Completion API is not configured")

        try:
            response = await self.client.chat(
                model=self.model,
                messages=messages,
                temperature=self.temperature
            )
        except Exception as e:
            logger.error(f"Cohere chat request failed: {str(e)}")

            error_str = str(e).lower()
            if "model" in error_str and ("removed" in error_str or "deprecated" in error_str):
                logger.warning(f"Cohere model {self.model} is deprecated. Please update COHERE_MODEL.")

            raise CompletionError("Completion request failed", cause=e) from e

        return self._extract_text(response)

    @staticmethod
    def _extract_text(response) -> str:
        message = getattr(response, "message", None)
        content = getattr(message, "content", None)
        if content is None:
            raise CompletionError("Completion response has no message content")

        parts = [
            item.text for item in content
            if getattr(item, "text", None) is not None
        ]
        if not parts and content:
            raise CompletionError("Completion response has no text content")

        return "".join(parts)
