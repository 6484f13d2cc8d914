"""Real-time next-service entry domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RealTimeEntry:
    """One upcoming service reported by the next-service feed for a stop."""

    trip_number: str
    line_code: str
    line_name: str
    direction_name: str  # Free text, e.g. "LW - Aldershot GO"
    scheduled_departure_time: str
    computed_departure_time: str
    departure_status: str  # Raw upstream code ("C" cancelled, "L" late, ...)
    scheduled_platform: str | None = None
    actual_platform: str | None = None
    service_type: str = ""  # "T" train, "B" bus, or empty
