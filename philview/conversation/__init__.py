from philview.conversation.keyword_rules import (
    ConfirmationMatcher,
    FallbackRouter,
    ReplyKind,
)
from philview.conversation.plan_builder import detect_plan
from philview.conversation.state_machine import (
    ConfirmationState,
    ConfirmationStateMachine,
    ConfirmationTrigger,
    InvalidTransitionError,
)

__all__ = [
    "ConfirmationStateMachine",
    "ConfirmationState",
    "ConfirmationTrigger",
    "InvalidTransitionError",
    "ConfirmationMatcher",
    "FallbackRouter",
    "ReplyKind",
    "detect_plan",
]
