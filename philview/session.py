"""
Chat session: the assistant's conversation loop for one chat widget.

Every submitted message is handled under a lock, so the outcome of
message N is fully applied (log, pending plan, dispatch) before message
N+1 is classified.

While a plan is pending, yes/no replies are interpreted before any
classification. A reply that is neither keeps the plan and re-prompts,
unless the reply itself proposes a new plan, which then replaces it.
"""

import asyncio
import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from philview.classifier.intent_classifier import IntentClassifier
from philview.classifier.outcomes import Direct, NeedsConfirmation, Reply
from philview.config import settings
from philview.conversation.keyword_rules import ConfirmationMatcher, ReplyKind
from philview.conversation.plan_builder import detect_plan
from philview.conversation.state_machine import ConfirmationState
from philview.dispatch.dispatcher import ActionDispatcher, LogoutCallback, NavigateCallback
from philview.logging_context import session_scope
from philview.prompts.prompt_templates import (
    INPUT_TOO_LONG_REPLY,
    PLAN_REJECTED_REPLY,
    build_execution_notice,
    build_plan_description,
    build_reprompt,
)
from philview.prompts.system_prompts import GREETING
from philview.schemas.conversation_schema import ConversationState, Message, Origin
from philview.schemas.plan_schema import Plan
from philview.schemas.user_schema import User

logger = logging.getLogger(__name__)


class ChatSession:
    """Owns the conversation state of one chat widget instance."""

    def __init__(
        self,
        on_navigate: NavigateCallback,
        on_logout: LogoutCallback,
        user: Optional[User] = None,
        classifier: Optional[IntentClassifier] = None,
        dispatcher: Optional[ActionDispatcher] = None,
        session_id: Optional[str] = None,
        max_input_length: Optional[int] = None,
    ) -> None:
        self.session_id = session_id or f"CHAT-{uuid.uuid4().hex[:8]}"
        self.user = user
        self._max_input_length = max_input_length or settings.chat.max_input_length
        self._classifier = classifier or IntentClassifier.from_settings()
        self._dispatcher = dispatcher or ActionDispatcher(on_navigate, on_logout)
        self._matcher = ConfirmationMatcher()
        self._state = ConversationState()
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()
        self._append(GREETING, Origin.ASSISTANT)

    @property
    def messages(self) -> list[Message]:
        return list(self._state.message_log)

    @property
    def pending_plan(self) -> Optional[Plan]:
        return self._state.pending_plan

    @property
    def state(self) -> ConfirmationState:
        return self._state.confirmation.current_state

    def state_trace(self) -> list[str]:
        return self._state.confirmation.get_state_trace()

    async def handle_message(self, text: str) -> list[Message]:
        """Process one user message; returns the assistant messages it produced.

        A message longer than ``max_input_length`` (after trimming) is logged
        and answered with a request to shorten it. It is never classified, and
        a pending plan stays pending.
        """
        if not text.strip():
            return []

        async with self._lock:
            with session_scope(self.session_id):
                self._append(text, Origin.USER)
                if len(text.strip()) > self._max_input_length:
                    logger.info(
                        "Refusing %d-character message (limit %d)",
                        len(text.strip()), self._max_input_length,
                    )
                    replies = [INPUT_TOO_LONG_REPLY]
                elif self._state.confirmation.is_awaiting():
                    replies = self._handle_pending_reply(text)
                else:
                    replies = await self._handle_idle(text)
                return [self._append(reply, Origin.ASSISTANT) for reply in replies]

    def _handle_pending_reply(self, text: str) -> list[str]:
        confirmation = self._state.confirmation
        kind = self._matcher.classify_reply(text)

        if kind == ReplyKind.AFFIRMATIVE:
            plan = confirmation.confirm()
            logger.info("User confirmed %s plan", plan.kind)
            notice = build_execution_notice(plan)
            self._dispatcher.dispatch_plan(plan)
            return [notice]

        if kind == ReplyKind.NEGATIVE:
            plan = confirmation.reject()
            logger.info("User rejected %s plan", plan.kind)
            return [PLAN_REJECTED_REPLY]

        new_plan = detect_plan(text)
        if new_plan is not None:
            confirmation.propose(new_plan)
            return [build_plan_description(new_plan)]

        plan = confirmation.note_unclear_reply()
        logger.info(
            "Unclear reply to pending %s plan (%d so far)", plan.kind, confirmation.unclear_replies
        )
        return [build_reprompt(plan)]

    async def _handle_idle(self, text: str) -> list[str]:
        outcome = await self._classifier.classify(text, self.user)

        if isinstance(outcome, NeedsConfirmation):
            self._state.confirmation.propose(outcome.plan)
            return [outcome.description]

        if isinstance(outcome, Direct):
            self._dispatcher.dispatch(outcome.action)
            return [outcome.reply]

        if isinstance(outcome, Reply):
            return [outcome.text]

        raise TypeError(f"Unexpected classification outcome: {outcome!r}")

    def _append(self, text: str, origin: Origin) -> Message:
        message = Message(
            id=str(next(self._ids)),
            text=text,
            origin=origin,
            timestamp=datetime.now(timezone.utc),
        )
        self._state.message_log.append(message)
        return message
