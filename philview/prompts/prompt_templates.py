"""Reply and plan text construction for the chat assistant."""

from typing import Optional, Union

from philview.schemas.action_schema import LogoutAction, NavigateAction
from philview.schemas.plan_schema import CancelAppointmentPlan, Plan, ScheduleAppointmentPlan
from philview.schemas.user_schema import User
from philview.tools.properties import (
    PROPERTY_CATALOG,
    format_peso_millions,
    get_price_range,
    get_property,
)

CONFIRMATION_PROMPT = 'Type "yes" to proceed or "no" to cancel.'
PLAN_REJECTED_REPLY = "Okay, cancelled that request."
DEFAULT_MODEL_REPLY = "Let me know what you need next."
INPUT_TOO_LONG_REPLY = "That was quite long. Could you keep it brief for me?"


def build_user_prompt(message: str, user: Optional[User]) -> str:
    """User turn sent to the model, tagged with the caller's role."""
    role = user.role.value if user else "unknown role"
    return f"User ({role}): {message}"


def build_action_reply(action: Union[NavigateAction, LogoutAction]) -> str:
    if isinstance(action, LogoutAction):
        return "Signing you out."
    return f"Navigating to {action.target.value}."


def _plan_details(plan: Plan) -> list[str]:
    details: list[str] = []
    if isinstance(plan, ScheduleAppointmentPlan) and plan.property_id:
        prop = get_property(plan.property_id)
        details.append(f"property {prop['name'] if prop else plan.property_id}")
    if isinstance(plan, CancelAppointmentPlan) and plan.property_name:
        details.append(f"property {plan.property_name}")
    if plan.date:
        details.append(f"date {plan.date}")
    if plan.time:
        details.append(f"time {plan.time}")
    return details


def build_plan_description(plan: Plan) -> str:
    """Numbered steps the assistant will take, ending with the yes/no prompt."""
    if isinstance(plan, CancelAppointmentPlan):
        lines = [
            "Plan:",
            "1) Open Appointments page",
            "2) Find a pending appointment (by property/date/time if given)",
            "3) Remove it after your confirmation",
        ]
    else:
        lines = [
            "Plan:",
            "1) Open Appointments page",
            "2) Fill property, date, and time",
            "3) Submit after your confirmation",
        ]
    details = _plan_details(plan)
    if details:
        lines.append("Details: " + ", ".join(details))
    lines.append(CONFIRMATION_PROMPT)
    return "\n".join(lines)


def build_execution_notice(plan: Plan) -> str:
    if isinstance(plan, CancelAppointmentPlan):
        return "Executing: opening Appointments to cancel a pending request."
    return "Executing: opening Appointments and prefilling details."


def build_reprompt(plan: Plan) -> str:
    """Reminder sent when a reply to a pending plan is neither yes nor no."""
    if isinstance(plan, CancelAppointmentPlan):
        pending = "cancel a pending appointment"
    else:
        pending = "schedule an appointment"
    return (
        f"I still have a pending request to {pending}. "
        'Please reply "yes" to proceed or "no" to cancel.'
    )


def build_fallback_reply(message: str, user: Optional[User]) -> str:
    """Canned answer used when no action matched a message."""
    lower = message.lower()

    if "property" in lower or "properties" in lower:
        listings = ", ".join(
            f"{info['name']} in {info['location']}" for info in PROPERTY_CATALOG.values()
        )
        return (
            f"We have several amazing properties available including {listings}. "
            "Would you like to know more about any specific property?"
        )

    if "appointment" in lower or "schedule" in lower:
        return (
            "I can help you schedule an appointment to view our properties. "
            "Please let me know your preferred date and time, and which property "
            "you're interested in."
        )

    if "price" in lower or "cost" in lower:
        low, high = get_price_range()
        return (
            f"Our properties range from {format_peso_millions(low)} to "
            f"{format_peso_millions(high)} depending on the location and features. "
            "I can provide detailed pricing information for specific properties."
        )

    if "financing" in lower or "payment" in lower:
        return (
            "We offer flexible financing options including bank loans and in-house "
            "financing. Our team can help you find the best payment plan that suits "
            "your budget."
        )

    if "location" in lower or "where" in lower:
        cities = sorted({info["location"] for info in PROPERTY_CATALOG.values()})
        return (
            f"Our properties are located in prime areas including {', '.join(cities)}. "
            "All locations offer great accessibility and amenities."
        )

    if user is not None:
        return (
            'Thanks! I can also navigate: say "go to dashboard", "open properties", '
            '"appointments", "balance", or "logout".'
        )
    return "Thanks! You can log in to access role dashboards, appointments, and balance."
