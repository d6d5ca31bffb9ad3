"""Shared test fixtures and helpers."""

import asyncio
import json
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from philview.classifier.intent_classifier import IntentClassifier
from philview.conversation.keyword_rules import ConfirmationMatcher, FallbackRouter
from philview.conversation.state_machine import ConfirmationStateMachine
from philview.schemas.user_schema import User, UserRole
from philview.tools import appointments


@pytest.fixture(autouse=True)
def _reset_appointments():
    appointments.reset()
    yield
    appointments.reset()


@pytest.fixture
def state_machine():
    return ConfirmationStateMachine()


@pytest.fixture
def matcher():
    return ConfirmationMatcher()


@pytest.fixture
def router():
    return FallbackRouter()


@pytest.fixture
def client_user():
    return User(
        id="client-001",
        name="Maria Santos",
        email="maria.santos@example.com",
        role=UserRole.CLIENT,
    )


@pytest.fixture
def broker_user():
    return User(id="broker-001", name="Jose Reyes", email="jose@philview.ph", role=UserRole.BROKER)


@pytest.fixture
def offline_classifier():
    """Classifier with no model configured, regardless of the environment."""
    return IntentClassifier()


class NavigationRecorder:
    """Collects host callbacks in the order they were invoked."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def on_navigate(self, target, payload) -> None:
        self.calls.append(("navigate", target, payload))

    def on_logout(self) -> None:
        self.calls.append(("logout",))


@pytest.fixture
def recorder():
    return NavigationRecorder()


def make_tool_call(name: str, arguments: Any) -> SimpleNamespace:
    """Helper to create a tool call the way the OpenAI SDK shapes it."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return SimpleNamespace(
        id="call_test",
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


def make_completion(
    content: Any = None,
    tool_calls: Optional[list[SimpleNamespace]] = None,
) -> SimpleNamespace:
    """Helper to create a chat completion response with a single choice."""
    message = SimpleNamespace(role="assistant", content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


class FakeCompletions:
    """Stands in for ``client.chat.completions`` with scripted behavior."""

    def __init__(
        self,
        response: Any = None,
        error: Optional[BaseException] = None,
        delay: float = 0.0,
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.requests: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.requests.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


def make_fake_client(
    response: Any = None,
    error: Optional[BaseException] = None,
    delay: float = 0.0,
) -> SimpleNamespace:
    """Helper to create an object shaped like AsyncOpenAI for ToolCallingModel."""
    completions = FakeCompletions(response=response, error=error, delay=delay)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))
