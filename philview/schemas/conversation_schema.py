"""Chat message log and per-session conversation state."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from philview.conversation.state_machine import ConfirmationStateMachine
from philview.schemas.plan_schema import Plan


class Origin(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single entry in the chat log. Ids are unique within a session."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    origin: Origin
    timestamp: datetime


@dataclass
class ConversationState:
    """
    Per-session conversation data.

    Owned by exactly one ChatSession and mutated only while it handles
    a message. The message log is append-only.
    """
    confirmation: ConfirmationStateMachine = field(default_factory=ConfirmationStateMachine)
    message_log: list[Message] = field(default_factory=list)

    @property
    def pending_plan(self) -> Optional[Plan]:
        return self.confirmation.pending_plan
