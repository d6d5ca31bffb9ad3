"""
Plan detection with slot extraction: Detect -> Extract -> Validate.

Scheduling and cancellation requests become plans instead of immediate
actions. Any date, time, or property mentioned in the same message is
extracted and validated so the appointments page can be prefilled.

Usage:
    plan = detect_plan("Please schedule an appointment at Skyline on 2025-03-18 at 2:30")
    # ScheduleAppointmentPlan(property_id="1", date="2025-03-18", time="02:30")
"""

import logging
import re
from datetime import datetime
from typing import Optional

from philview.schemas.plan_schema import CancelAppointmentPlan, Plan, ScheduleAppointmentPlan
from philview.tools.properties import get_property, match_property
from philview.utils import normalize_text

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")
_TIME_PATTERN = re.compile(r"\b(\d{1,2}):(\d{2})\b")


def _validate_date(value: str) -> bool:
    """Validate date is in YYYY-MM-DD format."""
    try:
        datetime.strptime(value.strip(), "%Y-%m-%d")
        return True
    except ValueError:
        return False


def _validate_time(value: str) -> bool:
    """Validate time is in HH:MM format."""
    try:
        datetime.strptime(value.strip(), "%H:%M")
        return True
    except ValueError:
        return False


def extract_date(text: str) -> Optional[str]:
    """First valid YYYY-MM-DD date in the text."""
    for candidate in _DATE_PATTERN.findall(text):
        if _validate_date(candidate):
            return candidate
    return None


def extract_time(text: str) -> Optional[str]:
    """First valid clock time in the text, normalized to zero-padded HH:MM."""
    for hours, minutes in _TIME_PATTERN.findall(text):
        candidate = f"{int(hours):02d}:{minutes}"
        if _validate_time(candidate):
            return candidate
    return None


def wants_cancellation(lower: str) -> bool:
    return "cancel" in lower and "appointment" in lower


def wants_scheduling(lower: str) -> bool:
    return "appointment" in lower and "schedule" in lower


def detect_plan(text: str) -> Optional[Plan]:
    """Return a plan for scheduling or cancellation intents, else None.

    Cancellation is checked first, so "cancel my scheduled appointment"
    is a cancellation.
    """
    lower = normalize_text(text)
    date = extract_date(lower)
    time = extract_time(lower)
    property_id = match_property(lower)

    if wants_cancellation(lower):
        prop = get_property(property_id) if property_id else None
        plan: Plan = CancelAppointmentPlan(
            property_name=prop["name"] if prop else None,
            date=date,
            time=time,
        )
    elif wants_scheduling(lower):
        plan = ScheduleAppointmentPlan(property_id=property_id, date=date, time=time)
    else:
        return None

    logger.debug("Detected %s plan: %s", plan.kind, plan.model_dump(exclude_none=True))
    return plan
