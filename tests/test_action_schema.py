"""Tests for action and appointment payload models."""

import pytest
from pydantic import ValidationError

from philview.schemas.action_schema import (
    AppointmentPayload,
    CancelHints,
    LogoutAction,
    NavigateAction,
    Section,
    parse_action,
)


class TestParseAction:
    def test_navigate(self):
        action = parse_action({"type": "navigate", "target": "clients"})
        assert action == NavigateAction(target=Section.CLIENTS)

    def test_logout(self):
        assert isinstance(parse_action({"type": "logout"}), LogoutAction)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            parse_action({"type": "delete_account"})

    def test_unknown_section_rejected(self):
        with pytest.raises(ValidationError):
            parse_action({"type": "navigate", "target": "settings"})

    def test_extra_field_rejected(self):
        with pytest.raises(ValidationError):
            parse_action({"type": "logout", "everywhere": True})


class TestNavigatePayloadRule:
    def test_payload_allowed_for_appointments(self):
        action = NavigateAction(
            target=Section.APPOINTMENTS, payload=AppointmentPayload(nonce="n1")
        )
        assert action.payload.nonce == "n1"

    def test_payload_rejected_elsewhere(self):
        with pytest.raises(ValidationError):
            NavigateAction(target=Section.BALANCE, payload=AppointmentPayload())

    def test_actions_are_immutable(self):
        action = NavigateAction(target=Section.DASHBOARD)
        with pytest.raises(ValidationError):
            action.target = Section.EVENTS


class TestAppointmentPayloadWire:
    def test_to_wire_uses_camel_case(self):
        payload = AppointmentPayload(property_id="2", date="2025-03-18", auto_submit=True, nonce="abc")
        assert payload.to_wire() == {
            "propertyId": "2",
            "date": "2025-03-18",
            "autoSubmit": True,
            "nonce": "abc",
        }

    def test_from_wire_restores_fields(self):
        wire = {
            "autoSubmit": False,
            "cancel": {"propertyName": "Garden Villas", "time": "09:00"},
            "time": "09:00",
            "nonce": "xyz",
        }
        payload = AppointmentPayload.from_wire(wire)
        assert payload.cancel == CancelHints(property_name="Garden Villas", time="09:00")
        assert payload.to_wire() == wire

    def test_from_wire_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            AppointmentPayload.from_wire({"propertyId": "1", "priority": "high"})

    def test_cancel_hints_reject_unknown_fields(self):
        with pytest.raises(ValidationError):
            AppointmentPayload.from_wire({"cancel": {"room": "A"}})
