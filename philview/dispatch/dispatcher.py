"""
Action dispatcher: applies resolved actions and confirmed plans to the host UI.

Confirmed plans become a navigation to the appointments page with a
payload carrying a fresh nonce. The page uses that nonce to apply the
payload's side effect at most once.
"""

import logging
import uuid
from typing import Callable, Optional, Union

from philview.schemas.action_schema import (
    AppointmentPayload,
    CancelHints,
    LogoutAction,
    NavigateAction,
    Section,
)
from philview.schemas.plan_schema import CancelAppointmentPlan, Plan, ScheduleAppointmentPlan

logger = logging.getLogger(__name__)

NavigateCallback = Callable[[Section, Optional[AppointmentPayload]], None]
LogoutCallback = Callable[[], None]


def _uuid_nonce() -> str:
    return uuid.uuid4().hex


class ActionDispatcher:
    """Invokes exactly one host callback per dispatched action."""

    def __init__(
        self,
        on_navigate: NavigateCallback,
        on_logout: LogoutCallback,
        nonce_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._on_navigate = on_navigate
        self._on_logout = on_logout
        self._nonce_factory = nonce_factory or _uuid_nonce
        self._minted: set[str] = set()

    @property
    def minted_nonces(self) -> frozenset[str]:
        return frozenset(self._minted)

    def mint_nonce(self) -> str:
        """Return a nonce never handed out before in this session."""
        nonce = self._nonce_factory()
        while nonce in self._minted:
            logger.warning("Nonce factory repeated %s; minting again", nonce)
            nonce = self._nonce_factory()
        self._minted.add(nonce)
        return nonce

    def dispatch(self, action: Union[NavigateAction, LogoutAction]) -> None:
        if isinstance(action, NavigateAction):
            logger.info(
                "Dispatching navigate -> %s%s",
                action.target.value,
                f" (nonce {action.payload.nonce})" if action.payload and action.payload.nonce else "",
            )
            self._on_navigate(action.target, action.payload)
        elif isinstance(action, LogoutAction):
            logger.info("Dispatching logout")
            self._on_logout()
        else:
            raise TypeError(f"Cannot dispatch {type(action).__name__}")

    def plan_to_action(self, plan: Plan) -> NavigateAction:
        """Convert a confirmed plan into an appointments navigation with a fresh nonce."""
        nonce = self.mint_nonce()
        if isinstance(plan, ScheduleAppointmentPlan):
            payload = AppointmentPayload(
                property_id=plan.property_id,
                date=plan.date,
                time=plan.time,
                auto_submit=True,
                nonce=nonce,
            )
        elif isinstance(plan, CancelAppointmentPlan):
            payload = AppointmentPayload(
                date=plan.date,
                time=plan.time,
                auto_submit=False,
                cancel=CancelHints(
                    property_name=plan.property_name, date=plan.date, time=plan.time
                ),
                nonce=nonce,
            )
        else:
            raise TypeError(f"Cannot convert {type(plan).__name__} to an action")
        return NavigateAction(target=Section.APPOINTMENTS, payload=payload)

    def dispatch_plan(self, plan: Plan) -> NavigateAction:
        action = self.plan_to_action(plan)
        self.dispatch(action)
        return action
