"""Parsing of the naive local timestamps used by the Metrolinx feeds."""

from datetime import datetime


def parse_transit_time(value: str | None) -> datetime | None:
    """Parse a feed timestamp such as ``"2024-06-01 08:15"`` or ``"2024-06-01 08:15:00"``.

    A UTC offset, when present, is dropped and the local wall time kept, so every
    result is naive and comparable with every other.

    Returns None for empty or unparsable values.
    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(str(value).strip().replace(" ", "T"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)
