"""Classification outcomes and the explicit result of a model call."""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from philview.prompts.prompt_templates import build_plan_description
from philview.schemas.action_schema import LogoutAction, NavigateAction
from philview.schemas.plan_schema import Plan

T = TypeVar("T")

SOURCE_MODEL = "model"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class Direct:
    """An action to dispatch immediately."""
    action: Union[NavigateAction, LogoutAction]
    reply: str
    source: str = SOURCE_FALLBACK


@dataclass(frozen=True)
class NeedsConfirmation:
    """A plan the user must confirm before anything is dispatched."""
    plan: Plan

    @property
    def description(self) -> str:
        return build_plan_description(self.plan)


@dataclass(frozen=True)
class Reply:
    """Plain assistant text with no action."""
    text: str
    source: str = SOURCE_FALLBACK


ClassificationOutcome = Union[Direct, NeedsConfirmation, Reply]


@dataclass(frozen=True)
class TransportError:
    """Why the model call produced no usable outcome."""
    kind: str  # "timeout" | "api_error" | "malformed_response"
    detail: str = ""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: TransportError


ModelResult = Union[Ok[ClassificationOutcome], Err]


def unwrap_or_else(
    result: ModelResult, fallback: Callable[[TransportError], ClassificationOutcome]
) -> ClassificationOutcome:
    """Return the successful outcome, or map the error through ``fallback``."""
    if isinstance(result, Ok):
        return result.value
    return fallback(result.error)
