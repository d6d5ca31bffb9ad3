"""Tests for action dispatch and plan-to-payload conversion."""

from itertools import cycle

import pytest

from philview.dispatch.dispatcher import ActionDispatcher
from philview.schemas.action_schema import (
    AppointmentPayload,
    CancelHints,
    LogoutAction,
    NavigateAction,
    Section,
)
from philview.schemas.plan_schema import CancelAppointmentPlan, ScheduleAppointmentPlan


@pytest.fixture
def dispatcher(recorder):
    return ActionDispatcher(recorder.on_navigate, recorder.on_logout)


class TestDispatch:
    def test_navigate_calls_callback_once(self, dispatcher, recorder):
        dispatcher.dispatch(NavigateAction(target=Section.EVENTS))
        assert recorder.calls == [("navigate", Section.EVENTS, None)]

    def test_logout_calls_callback_once(self, dispatcher, recorder):
        dispatcher.dispatch(LogoutAction())
        assert recorder.calls == [("logout",)]

    def test_bare_navigation_has_no_nonce(self, dispatcher):
        dispatcher.dispatch(NavigateAction(target=Section.APPOINTMENTS))
        assert dispatcher.minted_nonces == frozenset()

    def test_rejects_non_actions(self, dispatcher):
        with pytest.raises(TypeError):
            dispatcher.dispatch({"type": "navigate", "target": "events"})


class TestSchedulePlan:
    def test_schedule_payload(self, dispatcher):
        plan = ScheduleAppointmentPlan(property_id="1", date="2025-03-18", time="14:00")
        action = dispatcher.plan_to_action(plan)
        assert action.target == Section.APPOINTMENTS
        assert action.payload.property_id == "1"
        assert action.payload.date == "2025-03-18"
        assert action.payload.time == "14:00"
        assert action.payload.auto_submit is True
        assert action.payload.cancel is None
        assert action.payload.nonce

    def test_dispatch_plan_delivers_payload(self, dispatcher, recorder):
        action = dispatcher.dispatch_plan(ScheduleAppointmentPlan())
        assert recorder.calls == [("navigate", Section.APPOINTMENTS, action.payload)]


class TestCancelPlan:
    def test_cancel_payload(self, dispatcher):
        plan = CancelAppointmentPlan(property_name="Garden Villas", time="09:00")
        payload = dispatcher.plan_to_action(plan).payload
        assert payload.auto_submit is False
        assert payload.cancel == CancelHints(property_name="Garden Villas", time="09:00")
        assert payload.time == "09:00"
        assert payload.property_id is None

    def test_cancel_without_hints_still_has_cancel(self, dispatcher):
        payload = dispatcher.plan_to_action(CancelAppointmentPlan()).payload
        assert payload.cancel == CancelHints()


class TestNonces:
    def test_nonces_unique_across_dispatches(self, dispatcher):
        nonces = {
            dispatcher.dispatch_plan(ScheduleAppointmentPlan()).payload.nonce for _ in range(50)
        }
        assert len(nonces) == 50
        assert dispatcher.minted_nonces == frozenset(nonces)

    def test_repeated_factory_value_is_reminted(self, recorder):
        values = cycle(["same", "same", "other"])
        dispatcher = ActionDispatcher(
            recorder.on_navigate, recorder.on_logout, nonce_factory=lambda: next(values)
        )
        first = dispatcher.mint_nonce()
        second = dispatcher.mint_nonce()
        assert first == "same"
        assert second == "other"

    def test_payload_survives_wire_round_trip(self, dispatcher):
        plan = CancelAppointmentPlan(property_name="Metro Heights", date="2025-04-01")
        payload = dispatcher.plan_to_action(plan).payload
        assert AppointmentPayload.from_wire(payload.to_wire()) == payload
