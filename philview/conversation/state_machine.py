"""
Finite state machine for the plan/confirm protocol.

A conversation is either idle or awaiting confirmation of exactly one
plan. Every transition is declared in a table; anything else is rejected
with the list of triggers valid from the current state.

Usage:
    sm = ConfirmationStateMachine()
    sm.propose(ScheduleAppointmentPlan())
    assert sm.current_state == ConfirmationState.AWAITING_CONFIRMATION
    plan = sm.confirm()
    assert sm.current_state == ConfirmationState.IDLE
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from philview.schemas.plan_schema import Plan

logger = logging.getLogger(__name__)


class ConfirmationState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class ConfirmationTrigger(str, Enum):
    """Events that cause state transitions."""
    PLAN_PROPOSED = "plan_proposed"
    USER_CONFIRMED = "user_confirmed"
    USER_REJECTED = "user_rejected"
    REPLY_UNCLEAR = "reply_unclear"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: ConfirmationState
    to_state: ConfirmationState
    trigger: ConfirmationTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: ConfirmationState
    entered_at: datetime
    trigger: Optional[ConfirmationTrigger] = None
    plan_kind: Optional[str] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class ConfirmationStateMachine:
    """
    Holds at most one pending plan per conversation.

    Proposing a plan while another is pending replaces it; the earlier
    plan is dropped without being dispatched.
    """

    TRANSITIONS: list[Transition] = [
        Transition(ConfirmationState.IDLE, ConfirmationState.AWAITING_CONFIRMATION,
                   ConfirmationTrigger.PLAN_PROPOSED),
        Transition(ConfirmationState.AWAITING_CONFIRMATION, ConfirmationState.AWAITING_CONFIRMATION,
                   ConfirmationTrigger.PLAN_PROPOSED),
        Transition(ConfirmationState.AWAITING_CONFIRMATION, ConfirmationState.IDLE,
                   ConfirmationTrigger.USER_CONFIRMED),
        Transition(ConfirmationState.AWAITING_CONFIRMATION, ConfirmationState.IDLE,
                   ConfirmationTrigger.USER_REJECTED),
        Transition(ConfirmationState.AWAITING_CONFIRMATION, ConfirmationState.AWAITING_CONFIRMATION,
                   ConfirmationTrigger.REPLY_UNCLEAR),
    ]

    def __init__(self) -> None:
        self._current_state = ConfirmationState.IDLE
        self._pending_plan: Optional[Plan] = None
        self._history: list[StateEntry] = [
            StateEntry(state=ConfirmationState.IDLE, entered_at=datetime.now(timezone.utc))
        ]
        self._unclear_replies: int = 0

    @property
    def current_state(self) -> ConfirmationState:
        return self._current_state

    @property
    def pending_plan(self) -> Optional[Plan]:
        return self._pending_plan

    @property
    def unclear_replies(self) -> int:
        """Unclear replies received while the current plan has been pending."""
        return self._unclear_replies

    def is_awaiting(self) -> bool:
        return self._current_state == ConfirmationState.AWAITING_CONFIRMATION

    def transition(self, trigger: ConfirmationTrigger) -> ConfirmationState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new confirmation state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                    plan_kind=self._pending_plan.kind if self._pending_plan else None,
                ))
                logger.debug(
                    "Confirmation transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def propose(self, plan: Plan) -> Optional[Plan]:
        """Make ``plan`` the pending plan. Returns the plan it superseded, if any."""
        superseded = self._pending_plan
        self._pending_plan = plan
        self._unclear_replies = 0
        self.transition(ConfirmationTrigger.PLAN_PROPOSED)
        if superseded is not None:
            logger.info("Pending %s plan superseded by %s", superseded.kind, plan.kind)
        return superseded

    def confirm(self) -> Plan:
        """Release the pending plan for dispatch and return to idle."""
        return self._release(ConfirmationTrigger.USER_CONFIRMED)

    def reject(self) -> Plan:
        """Discard the pending plan and return to idle."""
        return self._release(ConfirmationTrigger.USER_REJECTED)

    def note_unclear_reply(self) -> Plan:
        """Record a reply that was neither yes nor no; the plan stays pending."""
        plan = self._require_plan(ConfirmationTrigger.REPLY_UNCLEAR)
        self.transition(ConfirmationTrigger.REPLY_UNCLEAR)
        self._unclear_replies += 1
        return plan

    def _require_plan(self, trigger: ConfirmationTrigger) -> Plan:
        if self._pending_plan is None:
            raise InvalidTransitionError(
                f"Trigger '{trigger.value}' needs a pending plan; "
                f"none is held in state '{self._current_state.value}'"
            )
        return self._pending_plan

    def _release(self, trigger: ConfirmationTrigger) -> Plan:
        plan = self._require_plan(trigger)
        self.transition(trigger)
        self._pending_plan = None
        self._unclear_replies = 0
        return plan

    def get_valid_triggers(self) -> list[ConfirmationTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]
