"""
Intent Matching Skill

Maps visitor text to a canned reply using keyword rules, so common questions
are answered without calling the completion API.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import logging

from studiobot.agents.prompts import (
    CONTACT_REPLY,
    PACKAGES_REPLY,
    PRICING_REPLY,
    TIMELINE_REPLY,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentRule:
    """A named rule: any keyword found in the lower-cased text selects the reply"""
    name: str
    keywords: Tuple[str, ...]
    reply: str

    def matches(self, text_lower: str) -> bool:
        return any(keyword in text_lower for keyword in self.keywords)


# Evaluated in order; the first matching rule wins.
DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule("packages", ("package",), PACKAGES_REPLY),
    IntentRule("pricing", ("price", "cost", "quote"), PRICING_REPLY),
    IntentRule("timeline", ("timeline", "how long"), TIMELINE_REPLY),
    IntentRule("contact", ("human", "talk to human", "contact"), CONTACT_REPLY),
)


class IntentMatchingSkill:
    """
    Skill for answering known intents with pre-authored replies.

    Pure: no I/O, no state beyond the rule list it was built with.
    """

    def __init__(self, rules: Sequence[IntentRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def match_rule(self, text: str) -> Optional[IntentRule]:
        """
        Find the first rule matching the text

        Args:
            text: Raw visitor message

        Returns:
            The matching IntentRule, or None
        """
        if not text:
            return None

        text_lower = text.lower()
        for rule in self.rules:
            if rule.matches(text_lower):
                logger.debug(f"Matched intent rule '{rule.name}'")
                return rule
        return None

    def match(self, text: str) -> Optional[str]:
        """Return the canned reply for the text, or None when no rule applies"""
        rule = self.match_rule(text)
        return rule.reply if rule else None


# Singleton instance
intent_matching_skill = IntentMatchingSkill()


def match_intent(text: str) -> Optional[str]:
    return intent_matching_skill.match(text)
