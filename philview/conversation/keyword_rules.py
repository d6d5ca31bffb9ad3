"""
Deterministic keyword rules for the chat assistant.

Two independent rule sets, each checking a different concern:
1. ConfirmationMatcher: reads a reply to a pending plan as affirmative or negative
2. FallbackRouter: maps a message to an action when the model is unavailable

Rules are evaluated in a fixed order so identical text always produces
the identical result.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from philview.schemas.action_schema import LogoutAction, NavigateAction, Section
from philview.utils import contains_any, normalize_text

logger = logging.getLogger(__name__)


class ReplyKind(str, Enum):
    AFFIRMATIVE = "affirmative"
    NEGATIVE = "negative"
    UNCLEAR = "unclear"


class ConfirmationMatcher:
    """Interprets replies while a plan is awaiting confirmation.

    Phrases match by containment, so "Confirmed." confirms and "nope"
    rejects.
    """

    AFFIRMATIVE_PHRASES = ("yes", "confirm", "do it", "go ahead")
    NEGATIVE_PHRASES = ("no", "cancel", "stop")

    def classify_reply(self, text: str) -> ReplyKind:
        lower = normalize_text(text)
        # Affirmative wins when both appear ("yes, no problem").
        if contains_any(lower, self.AFFIRMATIVE_PHRASES):
            return ReplyKind.AFFIRMATIVE
        if contains_any(lower, self.NEGATIVE_PHRASES):
            return ReplyKind.NEGATIVE
        return ReplyKind.UNCLEAR


@dataclass(frozen=True)
class RuleMatch:
    """Outcome of the fallback router."""
    action: Union[NavigateAction, LogoutAction]
    keyword: str


class FallbackRouter:
    """Ordered keyword routing used when the classification model is unavailable."""

    LOGOUT_KEYWORDS = ("logout", "log out", "sign out")

    # Sign-out is checked before this table.
    NAVIGATION_RULES: list[tuple[tuple[str, ...], Section]] = [
        (("appointment",), Section.APPOINTMENTS),
        (("balance",), Section.BALANCE),
        (("inquiry", "inquiries"), Section.INQUIRIES),
        (("client",), Section.CLIENTS),
        (("event",), Section.EVENTS),
        (("property", "browse"), Section.PROPERTIES),
        (("dashboard",), Section.DASHBOARD),
    ]

    def route(self, text: str) -> Optional[RuleMatch]:
        lower = normalize_text(text)

        for keyword in self.LOGOUT_KEYWORDS:
            if keyword in lower:
                logger.debug("Fallback rule matched sign-out keyword '%s'", keyword)
                return RuleMatch(action=LogoutAction(), keyword=keyword)

        for keywords, section in self.NAVIGATION_RULES:
            if contains_any(lower, keywords):
                keyword = next(k for k in keywords if k in lower)
                logger.debug("Fallback rule matched '%s' -> %s", keyword, section.value)
                return RuleMatch(action=NavigateAction(target=section), keyword=keyword)

        return None
