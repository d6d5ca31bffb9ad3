"""Property catalog with locations, pricing, and availability."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

PROPERTY_CATALOG: dict[str, dict] = {
    "1": {
        "name": "Skyline Residences",
        "location": "Makati City",
        "price": 8_500_000,
        "type": "Condominium",
        "status": "Available",
        "description": "Luxury high-rise living with stunning city views",
    },
    "2": {
        "name": "Garden Villas",
        "location": "Quezon City",
        "price": 12_000_000,
        "type": "Townhouse",
        "status": "Available",
        "description": "Spacious family homes with private gardens",
    },
    "3": {
        "name": "Metro Heights",
        "location": "Pasig City",
        "price": 6_800_000,
        "type": "Condominium",
        "status": "Reserved",
        "description": "Modern urban living near business districts",
    },
}

PROPERTY_ALIASES: dict[str, str] = {
    "skyline": "1", "makati": "1",
    "garden villas": "2", "garden": "2", "quezon": "2",
    "metro heights": "3", "metro": "3", "pasig": "3",
}


def get_all_properties() -> list[dict]:
    """Return all properties with basic info."""
    return [
        {"id": pid, "name": info["name"], "location": info["location"], "status": info["status"]}
        for pid, info in PROPERTY_CATALOG.items()
    ]


def get_property(property_id: str) -> Optional[dict]:
    """Get full details for a property by catalog ID."""
    info = PROPERTY_CATALOG.get(property_id)
    if info is None:
        return None
    return {"id": property_id, **info}


def get_default_property() -> Optional[dict]:
    """First available property, else the first listed one."""
    for pid, info in PROPERTY_CATALOG.items():
        if info["status"] == "Available":
            return {"id": pid, **info}
    for pid, info in PROPERTY_CATALOG.items():
        return {"id": pid, **info}
    return None


def match_property(query: str) -> Optional[str]:
    """Match free text to a property ID by full name, then by alias."""
    normalized = query.lower().strip()
    for pid, info in PROPERTY_CATALOG.items():
        if info["name"].lower() in normalized:
            return pid
    for alias, pid in PROPERTY_ALIASES.items():
        if alias in normalized:
            return pid
    return None


def get_price_range() -> tuple[int, int]:
    """Lowest and highest listed price across the catalog."""
    prices = [info["price"] for info in PROPERTY_CATALOG.values()]
    return min(prices), max(prices)


def format_peso_millions(amount: int) -> str:
    """Format a peso amount as millions, e.g. 6_800_000 -> 'PHP 6.8M'."""
    millions = amount / 1_000_000
    text = f"{millions:.1f}".rstrip("0").rstrip(".")
    return f"PHP {text}M"
