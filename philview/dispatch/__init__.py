from philview.dispatch.dispatcher import ActionDispatcher
from philview.dispatch.prefill import (
    AppointmentPrefillHandler,
    InvalidPayloadError,
    PrefillResult,
    PrefillStatus,
)

__all__ = [
    "ActionDispatcher",
    "AppointmentPrefillHandler",
    "InvalidPayloadError",
    "PrefillResult",
    "PrefillStatus",
]
