"""
Appointments page handler for payloads sent by the assistant.

The handler validates the payload at the page boundary, skips any nonce it
has already applied, and then either cancels a matching pending request,
auto-submits a new one, or just prefills the booking form.
"""

import logging
from dataclasses import dataclass
from datetime import date as date_cls
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from philview.config import settings
from philview.schemas.action_schema import AppointmentPayload, CancelHints, Section
from philview.schemas.user_schema import User
from philview.tools.appointments import (
    AppointmentRecord,
    cancel_appointment,
    create_appointment,
    find_pending_appointment,
)
from philview.tools.properties import get_default_property, get_property

logger = logging.getLogger(__name__)


class InvalidPayloadError(ValueError):
    """Raised when a payload does not match the appointments schema."""


class PrefillStatus(str, Enum):
    IGNORED = "ignored"
    DUPLICATE = "duplicate"
    PREFILLED = "prefilled"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"


@dataclass
class AppointmentForm:
    """Values shown in the booking form after a prefill."""
    property_id: Optional[str]
    date: str
    time: str
    appointment_type: str = "Viewing"


@dataclass
class PrefillResult:
    status: PrefillStatus
    form: Optional[AppointmentForm] = None
    appointment: Optional[AppointmentRecord] = None


class AppointmentPrefillHandler:
    """Consumes assistant payloads on the appointments page for one user."""

    def __init__(self, user: User, today: Optional[Callable[[], date_cls]] = None) -> None:
        self._user = user
        self._today = today or date_cls.today
        self._applied: set[str] = set()
        self._last_nonce: Optional[str] = None

    @property
    def last_nonce(self) -> Optional[str]:
        return self._last_nonce

    def handle(
        self,
        target: Section,
        payload: Union[AppointmentPayload, dict[str, Any], None],
    ) -> PrefillResult:
        if target != Section.APPOINTMENTS or payload is None:
            return PrefillResult(status=PrefillStatus.IGNORED)

        prefill = self._parse(payload)
        if prefill.nonce and prefill.nonce in self._applied:
            logger.info("Skipping already-applied payload (nonce %s)", prefill.nonce)
            return PrefillResult(status=PrefillStatus.DUPLICATE)

        if prefill.cancel is not None:
            result = self._cancel(prefill.cancel)
        else:
            result = self._prefill(prefill)

        if prefill.nonce:
            self._applied.add(prefill.nonce)
            self._last_nonce = prefill.nonce
        return result

    @staticmethod
    def _parse(payload: Union[AppointmentPayload, dict[str, Any]]) -> AppointmentPayload:
        if isinstance(payload, AppointmentPayload):
            return payload
        try:
            return AppointmentPayload.from_wire(payload)
        except ValidationError as exc:
            raise InvalidPayloadError(f"Invalid appointments payload: {exc}") from exc

    def _cancel(self, hints: CancelHints) -> PrefillResult:
        record = find_pending_appointment(
            self._user.id,
            property_name=hints.property_name,
            date=hints.date,
            time=hints.time,
        )
        if record is None:
            logger.info("No pending appointment matches cancel hints %s", hints.model_dump())
            return PrefillResult(status=PrefillStatus.NOT_FOUND)
        result = cancel_appointment(record["id"])
        return PrefillResult(status=PrefillStatus.CANCELLED, appointment=result.get("details"))

    def _prefill(self, prefill: AppointmentPayload) -> PrefillResult:
        prop = (
            (get_property(prefill.property_id) if prefill.property_id else None)
            or get_default_property()
        )
        form = AppointmentForm(
            property_id=prop["id"] if prop else None,
            date=prefill.date or self._today().isoformat(),
            time=prefill.time or settings.chat.default_appointment_time,
        )

        if not (prefill.auto_submit and prop):
            return PrefillResult(status=PrefillStatus.PREFILLED, form=form)

        result = create_appointment(
            user_id=self._user.id,
            client_name=self._user.name,
            client_email=self._user.email,
            property_id=prop["id"],
            property_name=prop["name"],
            date=form.date,
            time=form.time,
            appointment_type=form.appointment_type,
        )
        if not result["success"]:
            logger.warning("Auto-submit failed: %s", result["message"])
            return PrefillResult(status=PrefillStatus.PREFILLED, form=form)
        return PrefillResult(
            status=PrefillStatus.SUBMITTED, form=form, appointment=result.get("details")
        )
