"""Shared text helpers used across the Philview assistant."""

import re


def normalize_text(value: str) -> str:
    """Lowercase a message and collapse runs of whitespace.

    Examples:
        >>> normalize_text("  Schedule   an APPOINTMENT ")
        'schedule an appointment'
    """
    return re.sub(r"\s+", " ", value).strip().lower()


def contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    """Substring containment of any phrase in already-normalized text.

    Examples:
        >>> contains_any("confirmed.", ("yes", "confirm"))
        True
        >>> contains_any("nope", ("no", "cancel"))
        True
    """
    return any(phrase in text for phrase in phrases)
