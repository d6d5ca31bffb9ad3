"""
Centralized configuration with environment variable overrides.

Assistant naming, model settings, timeouts, and chat defaults are
configurable here. Nothing is hardcoded in classifier or dispatcher logic.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from dotenv import load_dotenv

from philview.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class AssistantConfig:
    """Persona settings for the in-app assistant."""

    name: str = os.getenv("ASSISTANT_NAME", "Philip")
    app_name: str = os.getenv("APP_NAME", "Philview")


@dataclass(frozen=True)
class ModelConfig:
    """Tool-calling LLM settings for the primary classification path."""

    api_key: Optional[str] = os.getenv("OPENAI_API_KEY") or None
    base_url: Optional[str] = os.getenv("OPENAI_BASE_URL") or None
    llm_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.0")
    llm_max_tokens: int = _safe_int("LLM_MAX_TOKENS", "256")
    llm_timeout_sec: float = _safe_float("LLM_TIMEOUT_SEC", "8.0")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class ChatConfig:
    """Chat widget and appointment prefill defaults."""

    max_input_length: int = _safe_int("MAX_INPUT_LENGTH", "500")
    default_appointment_time: str = os.getenv("DEFAULT_APPOINTMENT_TIME", "10:00")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    assistant: AssistantConfig = field(default_factory=AssistantConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    agent_name: str = os.getenv("AGENT_NAME", "philview-assistant")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )
    if config.model.llm_max_tokens < 1:
        raise ValueError(
            f"LLM_MAX_TOKENS must be >= 1, got {config.model.llm_max_tokens}"
        )
    if config.model.llm_timeout_sec <= 0:
        raise ValueError(
            f"LLM_TIMEOUT_SEC must be > 0, got {config.model.llm_timeout_sec}"
        )
    if config.chat.max_input_length < 1:
        raise ValueError(
            f"MAX_INPUT_LENGTH must be >= 1, got {config.chat.max_input_length}"
        )
    try:
        datetime.strptime(config.chat.default_appointment_time, "%H:%M")
    except ValueError:
        raise ValueError(
            "DEFAULT_APPOINTMENT_TIME must be HH:MM, "
            f"got {config.chat.default_appointment_time!r}"
        ) from None


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(config.log_level)
    logger.info(
        "Configuration loaded for '%s' (model %s)",
        config.assistant.app_name,
        "enabled" if config.model.enabled else "disabled",
    )
    return config


# Singleton instance
settings = load_config()
