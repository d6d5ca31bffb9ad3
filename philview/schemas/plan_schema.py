"""Multi-step plans that wait for explicit user confirmation."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class ScheduleAppointmentPlan(BaseModel):
    """Open Appointments, prefill the form, and submit it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["schedule_appointment"] = "schedule_appointment"
    property_id: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None


class CancelAppointmentPlan(BaseModel):
    """Open Appointments and cancel a matching pending request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["cancel_appointment"] = "cancel_appointment"
    property_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None


Plan = Union[ScheduleAppointmentPlan, CancelAppointmentPlan]
