"""
Mock appointment book.

In production, appointments live in the hosted document store; this
in-memory version backs the appointments page handler and the tests.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, TypedDict

logger = logging.getLogger(__name__)


class AppointmentRecord(TypedDict):
    """Full appointment record stored in the book."""

    id: str
    user_id: str
    client_name: str
    client_email: str
    property_id: str
    property_name: str
    date: str
    time: str
    status: str
    type: str
    created_at: str


class AppointmentResult(TypedDict, total=False):
    """Result from create_appointment or cancel_appointment."""

    success: bool
    message: str
    appointment_id: str
    details: AppointmentRecord

_appointments: dict[str, AppointmentRecord] = {}


def create_appointment(
    user_id: str,
    client_name: str,
    client_email: str,
    property_id: str,
    property_name: str,
    date: str,
    time: str,
    appointment_type: str = "Viewing",
) -> AppointmentResult:
    """Create a pending appointment request."""
    missing = [
        field_name
        for field_name, value in [
            ("user_id", user_id),
            ("property_id", property_id),
            ("date", date),
            ("time", time),
        ]
        if not value or not value.strip()
    ]
    if missing:
        return {
            "success": False,
            "message": f"Cannot create appointment - missing required fields: {', '.join(missing)}.",
        }

    appointment_id = f"APT-{uuid.uuid4().hex[:6].upper()}"

    record: AppointmentRecord = {
        "id": appointment_id,
        "user_id": user_id,
        "client_name": client_name,
        "client_email": client_email,
        "property_id": property_id,
        "property_name": property_name,
        "date": date,
        "time": time,
        "status": "Pending",
        "type": appointment_type,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }

    _appointments[appointment_id] = record
    logger.info(
        "Appointment created: %s for %s at %s on %s %s",
        appointment_id, user_id, property_name, date, time,
    )

    return {
        "success": True,
        "appointment_id": appointment_id,
        "message": f"Appointment requested for {property_name} on {date} at {time}.",
        "details": record,
    }


def cancel_appointment(appointment_id: str) -> AppointmentResult:
    """Mark an appointment as cancelled."""
    if appointment_id not in _appointments:
        return {"success": False, "message": f"Appointment {appointment_id} not found."}
    _appointments[appointment_id]["status"] = "Cancelled"
    logger.info("Appointment cancelled: %s", appointment_id)
    return {
        "success": True,
        "appointment_id": appointment_id,
        "message": f"Appointment {appointment_id} has been cancelled.",
        "details": _appointments[appointment_id],
    }


def find_pending_appointment(
    user_id: str,
    property_name: Optional[str] = None,
    date: Optional[str] = None,
    time: Optional[str] = None,
) -> Optional[AppointmentRecord]:
    """First pending appointment of a user matching every hint that is given.

    The property hint matches as a case-insensitive substring of the
    property name; date and time must match exactly.
    """
    for record in _appointments.values():
        if record["user_id"] != user_id or record["status"] != "Pending":
            continue
        if property_name and property_name.lower() not in record["property_name"].lower():
            continue
        if date and record["date"] != date:
            continue
        if time and record["time"] != time:
            continue
        return record
    return None


def list_appointments(user_id: str) -> list[AppointmentRecord]:
    """All appointments of a user, in creation order."""
    return [r for r in _appointments.values() if r["user_id"] == user_id]


def get_appointment(appointment_id: str) -> Optional[AppointmentRecord]:
    """Retrieve an appointment by ID."""
    return _appointments.get(appointment_id)


def reset() -> None:
    """Clear all appointments. Used by test fixtures for isolation."""
    _appointments.clear()
