"""
Intent classifier: message text -> Direct action, plan, or plain reply.

Order of evaluation:
1. Scheduling/cancellation intents become plans (no model call).
2. If a model is configured, it picks a navigation tool or answers.
3. Otherwise, or when the model call fails, ordered keyword rules decide.

The classifier never raises for transport problems; they are mapped to
the keyword path through ``unwrap_or_else``.
"""

import logging
from typing import Optional

from philview.classifier.llm_client import ToolCallingModel
from philview.classifier.outcomes import (
    SOURCE_FALLBACK,
    ClassificationOutcome,
    Direct,
    NeedsConfirmation,
    Reply,
    TransportError,
    unwrap_or_else,
)
from philview.config import settings
from philview.conversation.keyword_rules import FallbackRouter
from philview.conversation.plan_builder import detect_plan
from philview.prompts.prompt_templates import build_action_reply, build_fallback_reply
from philview.schemas.user_schema import User

logger = logging.getLogger(__name__)


class IntentClassifier:
    """Maps a user message plus role context to a classification outcome."""

    def __init__(
        self,
        model: Optional[ToolCallingModel] = None,
        router: Optional[FallbackRouter] = None,
    ) -> None:
        self._model = model
        self._router = router or FallbackRouter()

    @classmethod
    def from_settings(cls) -> "IntentClassifier":
        """Build a classifier that uses the model only when an API key is configured."""
        model = ToolCallingModel() if settings.model.enabled else None
        return cls(model=model)

    @property
    def model_enabled(self) -> bool:
        return self._model is not None

    async def classify(self, text: str, user: Optional[User] = None) -> ClassificationOutcome:
        message = text.strip()
        if not message:
            raise ValueError("Cannot classify an empty message")

        plan = detect_plan(message)
        if plan is not None:
            logger.info("Message needs confirmation: %s plan", plan.kind)
            return NeedsConfirmation(plan=plan)

        if self._model is None:
            return self.classify_fallback(message, user)

        result = await self._model.classify(message, user)

        def _degrade(error: TransportError) -> ClassificationOutcome:
            logger.warning("Falling back to keyword routing (%s)", error.kind)
            return self.classify_fallback(message, user)

        return unwrap_or_else(result, _degrade)

    def classify_fallback(self, text: str, user: Optional[User] = None) -> ClassificationOutcome:
        """Deterministic keyword classification; a pure function of the text and user."""
        match = self._router.route(text)
        if match is None:
            return Reply(text=build_fallback_reply(text, user), source=SOURCE_FALLBACK)
        return Direct(
            action=match.action,
            reply=build_action_reply(match.action),
            source=SOURCE_FALLBACK,
        )
