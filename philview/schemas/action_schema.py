"""Navigation actions and the appointment payload exchanged with the host page."""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class Section(str, Enum):
    """Fixed set of navigation destinations in the Philview UI."""
    DASHBOARD = "dashboard"
    PROPERTIES = "properties"
    APPOINTMENTS = "appointments"
    BALANCE = "balance"
    INQUIRIES = "inquiries"
    CLIENTS = "clients"
    EVENTS = "events"


class CancelHints(BaseModel):
    """Hints used by the appointments page to find the request to cancel."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    property_name: Optional[str] = Field(default=None, alias="propertyName")
    date: Optional[str] = None
    time: Optional[str] = None


class AppointmentPayload(BaseModel):
    """Structured payload attached to a navigation to the appointments page."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    property_id: Optional[str] = Field(default=None, alias="propertyId")
    date: Optional[str] = None
    time: Optional[str] = None
    auto_submit: bool = Field(default=False, alias="autoSubmit")
    cancel: Optional[CancelHints] = None
    nonce: Optional[str] = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the camelCase field names the page expects."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "AppointmentPayload":
        """Validate a payload mapping; unknown fields are rejected."""
        return cls.model_validate(data)


class NavigateAction(BaseModel):
    """Move the UI to a section, optionally with an appointments payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["navigate"] = "navigate"
    target: Section
    payload: Optional[AppointmentPayload] = None

    @model_validator(mode="after")
    def _payload_only_for_appointments(self) -> "NavigateAction":
        if self.payload is not None and self.target != Section.APPOINTMENTS:
            raise ValueError(
                f"Payloads are only accepted for '{Section.APPOINTMENTS.value}', "
                f"got target '{self.target.value}'"
            )
        return self


class LogoutAction(BaseModel):
    """Sign the current user out."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["logout"] = "logout"


Action = Annotated[Union[NavigateAction, LogoutAction], Field(discriminator="type")]

_ACTION_ADAPTER = TypeAdapter(Action)


def parse_action(data: dict[str, Any]) -> Union[NavigateAction, LogoutAction]:
    """Validate a raw action mapping into a typed Action.

    Raises:
        pydantic.ValidationError: On unknown types, sections, or fields.
    """
    return _ACTION_ADAPTER.validate_python(data)
