"""
Offline console demo: chat with the Philview assistant without any API keys.

Runs the real chat session, confirmation state machine, dispatcher, and
appointments page handler with keyword routing only. No LLM, no network
calls. Navigation and logout callbacks are printed, and appointment
payloads are fed to the page handler so nonce handling is visible.

Usage:
    python console_demo.py
    python console_demo.py --scenario schedule
    python console_demo.py --scenario cancel
"""

import argparse
import asyncio
from typing import Optional

from philview.classifier.intent_classifier import IntentClassifier
from philview.config import settings
from philview.dispatch.prefill import AppointmentPrefillHandler
from philview.schemas.action_schema import AppointmentPayload, Section
from philview.schemas.user_schema import User, UserRole
from philview.session import ChatSession
from philview.tools.appointments import list_appointments

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_USER = User(
    id="demo-client",
    name="Maria Santos",
    email="maria.santos@example.com",
    role=UserRole.CLIENT,
)


class ConsoleChat:
    """Simulates the chat widget and host page in the terminal."""

    def __init__(self) -> None:
        self.user: Optional[User] = DEMO_USER
        self.current_page = "dashboard"
        self.page_handler = AppointmentPrefillHandler(DEMO_USER)
        self.session = ChatSession(
            on_navigate=self._on_navigate,
            on_logout=self._on_logout,
            user=self.user,
            classifier=IntentClassifier(),
        )
        self._last_delivery: Optional[tuple[Section, Optional[AppointmentPayload]]] = None

    def assistant_say(self, text: str) -> None:
        name = settings.assistant.name
        for line in text.splitlines():
            print(f"{GREEN}{BOLD}[{name}]{RESET} {GREEN}{line}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _on_navigate(self, target: Section, payload: Optional[AppointmentPayload]) -> None:
        self.current_page = target.value
        self._last_delivery = (target, payload)
        wire = payload.to_wire() if payload else None
        self.system_log(f"Navigate -> {target.value} payload={wire}")
        result = self.page_handler.handle(target, wire)
        self.system_log(f"Appointments page: {result.status.value}")

    def _on_logout(self) -> None:
        self.system_log("Logout requested; user signed out")
        self.user = None
        self.current_page = "home"

    def redeliver_last(self) -> None:
        """Replay the last navigation, as a page re-render would."""
        if self._last_delivery is None:
            self.system_log("Nothing to redeliver")
            return
        target, payload = self._last_delivery
        result = self.page_handler.handle(target, payload.to_wire() if payload else None)
        self.system_log(f"Redelivered -> {target.value}: {result.status.value}")

    SCENARIOS: dict[str, list[str]] = {
        "schedule": [
            "I want to schedule an appointment at Skyline Residences on 2025-03-18 at 14:00",
            "yes go ahead",
            "/redeliver",
            "show my balance",
        ],
        "cancel": [
            "schedule an appointment at Garden Villas",
            "yes",
            "please cancel my appointment",
            "what?",
            "no, cancel that",
            "please cancel my appointment at Garden Villas",
            "confirm",
        ],
        "navigate": [
            "take me to the dashboard",
            "any upcoming events?",
            "what does it cost?",
            "logout and check my appointment",
        ],
    }

    async def _process(self, text: str) -> None:
        if text == "/redeliver":
            self.redeliver_last()
            return
        for message in await self.session.handle_message(text):
            self.assistant_say(message.text)
        self.system_log(f"State: {self.session.state.value} | page: {self.current_page}")

    async def run_scenario(self, scenario: str) -> None:
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.assistant.app_name.upper()} ASSISTANT - Scenario: {scenario}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()
        self.assistant_say(self.session.messages[0].text)

        for step in steps:
            print(f"\n{BLUE}[User] {RESET}{step}")
            await self._process(step)

        self._print_summary(f"Scenario '{scenario}' complete.")

    async def run(self) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.assistant.app_name.upper()} ASSISTANT - Console Demo{RESET}")
        print(f"{BOLD}  Type 'quit' to exit, '/redeliver' to replay the last navigation{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()
        self.assistant_say(self.session.messages[0].text)

        while True:
            user_input = input(f"\n{BLUE}[User] {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                break
            await self._process(user_input)

        self._print_summary("Conversation complete.")

    def _print_summary(self, title: str) -> None:
        trace = self.session.state_trace()
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(trace)}{RESET}")
        for apt in list_appointments(DEMO_USER.id):
            print(
                f"{YELLOW}  {apt['id']}: {apt['property_name']} "
                f"{apt['date']} {apt['time']} [{apt['status']}]{RESET}"
            )
        print(f"{BOLD}{'=' * 60}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline Philview assistant demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleChat.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    chat = ConsoleChat()
    if args.scenario:
        asyncio.run(chat.run_scenario(args.scenario))
    else:
        asyncio.run(chat.run())


if __name__ == "__main__":
    main()
