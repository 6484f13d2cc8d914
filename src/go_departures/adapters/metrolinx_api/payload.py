"""Helpers for reading the loosely-typed Metrolinx JSON payloads."""

from typing import Any


def as_list(value: Any) -> list[Any]:
    """Normalize a feed collection that may be absent, a single object, or a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def as_dict(value: Any) -> dict[str, Any]:
    """Return the value if it is a JSON object, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def dig(data: Any, *path: str) -> Any:
    """Follow a path of keys through nested objects, returning None on any miss."""
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_text(data: dict[str, Any], *keys: str) -> str:
    """Return the first non-empty value among candidate keys, as a string."""
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return str(value)
    return ""


def first_float(data: dict[str, Any], *keys: str) -> float | None:
    """Return the first candidate value that converts to a float."""
    for key in keys:
        value = data.get(key)
        if value is None or value == "":
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None
