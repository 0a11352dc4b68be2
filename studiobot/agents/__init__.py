"""
Agents Package

Chat orchestration with its skills and subagents.
"""

from .main_agent import ChatResult, StudioChatAgent

__all__ = ["ChatResult", "StudioChatAgent"]
