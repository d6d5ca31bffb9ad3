"""Tests for the plan confirmation state machine."""

import pytest

from philview.conversation.state_machine import (
    ConfirmationState,
    ConfirmationStateMachine,
    ConfirmationTrigger,
    InvalidTransitionError,
)
from philview.schemas.plan_schema import CancelAppointmentPlan, ScheduleAppointmentPlan


class TestInitialState:
    def test_starts_idle(self, state_machine):
        assert state_machine.current_state == ConfirmationState.IDLE

    def test_no_pending_plan(self, state_machine):
        assert state_machine.pending_plan is None
        assert not state_machine.is_awaiting()

    def test_initial_history_has_one_entry(self, state_machine):
        assert len(state_machine.get_history()) == 1

    def test_only_proposal_valid_when_idle(self, state_machine):
        assert state_machine.get_valid_triggers() == [ConfirmationTrigger.PLAN_PROPOSED]


class TestInvalidTransitions:
    def test_confirm_when_idle(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.confirm()

    def test_reject_when_idle(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.reject()

    def test_unclear_reply_when_idle(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.note_unclear_reply()

    def test_error_lists_valid_triggers(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="plan_proposed"):
            state_machine.transition(ConfirmationTrigger.USER_CONFIRMED)

    def test_failed_transition_keeps_state(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.confirm()
        assert state_machine.current_state == ConfirmationState.IDLE
        assert len(state_machine.get_history()) == 1


class TestProposeAndConfirm:
    def test_propose_awaits_confirmation(self, state_machine):
        plan = ScheduleAppointmentPlan()
        assert state_machine.propose(plan) is None
        assert state_machine.current_state == ConfirmationState.AWAITING_CONFIRMATION
        assert state_machine.pending_plan == plan

    def test_confirm_returns_plan_and_clears(self, state_machine):
        plan = ScheduleAppointmentPlan(property_id="1")
        state_machine.propose(plan)
        assert state_machine.confirm() == plan
        assert state_machine.current_state == ConfirmationState.IDLE
        assert state_machine.pending_plan is None

    def test_reject_returns_plan_and_clears(self, state_machine):
        plan = CancelAppointmentPlan()
        state_machine.propose(plan)
        assert state_machine.reject() == plan
        assert state_machine.pending_plan is None

    def test_second_confirm_fails(self, state_machine):
        state_machine.propose(ScheduleAppointmentPlan())
        state_machine.confirm()
        with pytest.raises(InvalidTransitionError):
            state_machine.confirm()


class TestSupersede:
    def test_new_plan_replaces_pending(self, state_machine):
        first = ScheduleAppointmentPlan()
        second = CancelAppointmentPlan()
        state_machine.propose(first)
        superseded = state_machine.propose(second)
        assert superseded == first
        assert state_machine.pending_plan == second

    def test_at_most_one_plan(self, state_machine):
        state_machine.propose(ScheduleAppointmentPlan())
        state_machine.propose(ScheduleAppointmentPlan(date="2025-03-18"))
        assert state_machine.confirm().date == "2025-03-18"
        assert state_machine.pending_plan is None


class TestUnclearReplies:
    def test_unclear_keeps_plan(self, state_machine):
        plan = ScheduleAppointmentPlan()
        state_machine.propose(plan)
        assert state_machine.note_unclear_reply() == plan
        assert state_machine.is_awaiting()

    def test_unclear_count(self, state_machine):
        state_machine.propose(ScheduleAppointmentPlan())
        state_machine.note_unclear_reply()
        state_machine.note_unclear_reply()
        assert state_machine.unclear_replies == 2

    def test_count_resets_on_new_plan(self, state_machine):
        state_machine.propose(ScheduleAppointmentPlan())
        state_machine.note_unclear_reply()
        state_machine.propose(CancelAppointmentPlan())
        assert state_machine.unclear_replies == 0


class TestHistory:
    def test_state_trace(self, state_machine):
        state_machine.propose(ScheduleAppointmentPlan())
        state_machine.note_unclear_reply()
        state_machine.confirm()
        assert state_machine.get_state_trace() == [
            "idle",
            "awaiting_confirmation",
            "awaiting_confirmation",
            "idle",
        ]

    def test_history_records_trigger_and_plan_kind(self, state_machine):
        state_machine.propose(CancelAppointmentPlan())
        entry = state_machine.get_history()[-1]
        assert entry.trigger == ConfirmationTrigger.PLAN_PROPOSED
        assert entry.plan_kind == "cancel_appointment"

    def test_history_is_a_copy(self, state_machine):
        state_machine.get_history().clear()
        assert len(state_machine.get_history()) == 1

    def test_machines_are_independent(self):
        a = ConfirmationStateMachine()
        b = ConfirmationStateMachine()
        a.propose(ScheduleAppointmentPlan())
        assert not b.is_awaiting()


class TestPlanRequired:
    """A raw proposal trigger without a plan must not let confirm/reject succeed."""

    def test_confirm_without_plan_raises(self, state_machine):
        state_machine.transition(ConfirmationTrigger.PLAN_PROPOSED)
        with pytest.raises(InvalidTransitionError, match="needs a pending plan"):
            state_machine.confirm()
        assert state_machine.current_state == ConfirmationState.AWAITING_CONFIRMATION

    def test_reject_without_plan_raises(self, state_machine):
        state_machine.transition(ConfirmationTrigger.PLAN_PROPOSED)
        with pytest.raises(InvalidTransitionError):
            state_machine.reject()

    def test_unclear_without_plan_raises(self, state_machine):
        state_machine.transition(ConfirmationTrigger.PLAN_PROPOSED)
        history_len = len(state_machine.get_history())
        with pytest.raises(InvalidTransitionError):
            state_machine.note_unclear_reply()
        assert state_machine.unclear_replies == 0
        assert len(state_machine.get_history()) == history_len
