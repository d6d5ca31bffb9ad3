"""
Navigation tool vocabulary exposed to the tool-calling model.

Each tool is registered with its OpenAI function schema and a parser that
turns the model's arguments into a typed Action. Only registered tools
with valid arguments ever become actions; everything else is ignored.
"""

import json
import logging
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from philview.schemas.action_schema import LogoutAction, NavigateAction, Section

logger = logging.getLogger(__name__)

ActionParser = Callable[[dict[str, Any]], Optional[Union[NavigateAction, LogoutAction]]]

_TOOL_REGISTRY: dict[str, tuple[dict[str, Any], ActionParser]] = {}


def register_tool(name: str, schema: dict[str, Any], parser: ActionParser) -> None:
    """Register a tool's function schema and its argument parser."""
    _TOOL_REGISTRY[name] = (schema, parser)
    logger.debug("Tool registered: %s", name)


def get_registered_tools() -> list[str]:
    """Return names of all registered tools."""
    return list(_TOOL_REGISTRY.keys())


def get_tool_definitions() -> list[dict[str, Any]]:
    """Tool definitions in the chat-completions ``tools`` format."""
    return [
        {"type": "function", "function": {"name": name, **schema}}
        for name, (schema, _) in _TOOL_REGISTRY.items()
    ]


def parse_tool_call(
    name: str, arguments: Union[str, dict[str, Any], None]
) -> Optional[Union[NavigateAction, LogoutAction]]:
    """Convert a model tool call into an Action, or None if it is not actionable."""
    if name not in _TOOL_REGISTRY:
        logger.info("Ignoring call to unknown tool '%s'", name)
        return None

    if isinstance(arguments, str):
        try:
            args = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError:
            logger.info("Ignoring '%s' call with unparseable arguments: %r", name, arguments)
            return None
    else:
        args = arguments or {}

    if not isinstance(args, dict):
        logger.info("Ignoring '%s' call with non-object arguments: %r", name, args)
        return None

    _, parser = _TOOL_REGISTRY[name]
    try:
        return parser(args)
    except (ValidationError, ValueError, TypeError) as exc:
        logger.info("Ignoring '%s' call with invalid arguments %r: %s", name, args, exc)
        return None


def _parse_navigate(args: dict[str, Any]) -> NavigateAction:
    if set(args) != {"target"}:
        raise ValueError(f"navigate expects exactly a 'target' argument, got {sorted(args)}")
    return NavigateAction(target=Section(args["target"]))


def _parse_logout(args: dict[str, Any]) -> Optional[LogoutAction]:
    if set(args) - {"confirm"}:
        raise ValueError(f"logout accepts only 'confirm', got {sorted(args)}")
    confirm = args.get("confirm", True)
    if not isinstance(confirm, bool):
        raise TypeError(f"'confirm' must be a boolean, got {confirm!r}")
    return LogoutAction() if confirm else None


NAVIGATE_SCHEMA: dict[str, Any] = {
    "description": "Navigate the Philview UI to a target section. Only use supported targets.",
    "parameters": {
        "type": "object",
        "properties": {
            "target": {"type": "string", "enum": [s.value for s in Section]},
        },
        "required": ["target"],
        "additionalProperties": False,
    },
}

LOGOUT_SCHEMA: dict[str, Any] = {
    "description": "Sign the current user out of the Philview UI.",
    "parameters": {
        "type": "object",
        "properties": {
            "confirm": {"type": "boolean", "default": True},
        },
        "additionalProperties": False,
    },
}


def _auto_register() -> None:
    """Register the built-in tools. Called once at import time."""
    register_tool("navigate", NAVIGATE_SCHEMA, _parse_navigate)
    register_tool("logout", LOGOUT_SCHEMA, _parse_logout)


_auto_register()
