"""Subagents: context assembly and the completion client."""

from .completion_client import CohereCompletionClient, CompletionClient, CompletionError
from .context_assembler import ContextAssembler

__all__ = ["CohereCompletionClient", "CompletionClient", "CompletionError", "ContextAssembler"]
