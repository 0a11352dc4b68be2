"""Stateless skills used by the chat agent."""

from .intent_matching import IntentMatchingSkill, IntentRule, intent_matching_skill, match_intent

__all__ = ["IntentMatchingSkill", "IntentRule", "intent_matching_skill", "match_intent"]
