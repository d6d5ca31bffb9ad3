"""
System prompt for the tool-calling classification model.

The assistant persona and app name are injected from configuration.
The navigation targets are generated from the Section enum so the
prompt cannot drift from the tool schema.
"""

from philview.config import settings
from philview.schemas.action_schema import Section

_assistant = settings.assistant

NAVIGATION_TARGETS = ", ".join(s.value for s in Section)

ASSISTANT_SYSTEM_PROMPT = f"""You are {_assistant.name}, an in-app agent for {_assistant.app_name}.
Always be concise (<=2 sentences) and helpful.
You can call tools to navigate: {NAVIGATION_TARGETS}.
Use logout when asked to sign out.
If no tool is needed, just answer briefly."""

GREETING = (
    f"Hello! I'm {_assistant.name}, your virtual assistant. How can I help you today?"
)
