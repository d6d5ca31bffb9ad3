"""
Tool-calling model client for the primary classification path.

The model sees the fixed system prompt and the user's role-tagged message,
and may call ``navigate`` or ``logout``. The call is bounded by a timeout;
every transport or response-shape problem is returned as an ``Err`` value
rather than raised, so callers can map it to the keyword fallback.
"""

import asyncio
import logging
from typing import Any, Optional, Union

import openai
from openai import AsyncOpenAI

from philview.classifier.outcomes import (
    SOURCE_MODEL,
    Direct,
    Err,
    ModelResult,
    Ok,
    Reply,
    TransportError,
)
from philview.config import settings
from philview.prompts.prompt_templates import (
    DEFAULT_MODEL_REPLY,
    build_action_reply,
    build_user_prompt,
)
from philview.prompts.system_prompts import ASSISTANT_SYSTEM_PROMPT
from philview.schemas.user_schema import User
from philview.tools.navigation import get_tool_definitions, parse_tool_call

logger = logging.getLogger(__name__)


def _join_content(content: Any) -> str:
    """Flatten string or segmented message content into trimmed text."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for part in content:
            text = part.get("text") if isinstance(part, dict) else getattr(part, "text", None)
            if isinstance(text, str) and text.strip():
                parts.append(text.strip())
        return " ".join(parts)
    raise TypeError(f"Unsupported message content type: {type(content).__name__}")


class ToolCallingModel:
    """Wraps an AsyncOpenAI client bound to the navigation tools."""

    def __init__(
        self,
        client: Optional[Any] = None,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout_sec: Optional[float] = None,
    ) -> None:
        cfg = settings.model
        self._timeout_sec = timeout_sec if timeout_sec is not None else cfg.llm_timeout_sec
        self._client = client or AsyncOpenAI(
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout=self._timeout_sec,
            max_retries=0,
        )
        self._model = model or cfg.llm_model
        self._temperature = temperature if temperature is not None else cfg.llm_temperature
        self._max_tokens = max_tokens or cfg.llm_max_tokens

    @property
    def timeout_sec(self) -> float:
        return self._timeout_sec

    async def classify(self, text: str, user: Optional[User]) -> ModelResult:
        messages = [
            {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(text, user)},
        ]
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    tools=get_tool_definitions(),
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                ),
                timeout=self._timeout_sec,
            )
        except asyncio.TimeoutError:
            logger.warning("Model call timed out after %.1fs", self._timeout_sec)
            return Err(TransportError("timeout", f"no response within {self._timeout_sec}s"))
        except (openai.OpenAIError, OSError) as exc:
            logger.warning("Model call failed: %s", exc)
            return Err(TransportError("api_error", str(exc)))

        try:
            return Ok(self._parse_response(response))
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            logger.warning("Malformed model response: %s", exc)
            return Err(TransportError("malformed_response", str(exc)))

    def _parse_response(self, response: Any) -> Union[Direct, Reply]:
        if not response.choices:
            raise IndexError("response has no choices")
        message = response.choices[0].message

        tool_calls = getattr(message, "tool_calls", None) or []
        if tool_calls:
            if len(tool_calls) > 1:
                logger.debug("Model returned %d tool calls; using the first", len(tool_calls))
            call = tool_calls[0]
            action = parse_tool_call(call.function.name, call.function.arguments)
            if action is not None:
                logger.info("Model selected tool '%s'", call.function.name)
                return Direct(action=action, reply=build_action_reply(action), source=SOURCE_MODEL)

        text = _join_content(getattr(message, "content", None))
        return Reply(text=text or DEFAULT_MODEL_REPLY, source=SOURCE_MODEL)
