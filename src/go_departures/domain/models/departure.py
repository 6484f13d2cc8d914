"""Departure domain model."""

from dataclasses import dataclass
from typing import Literal

DepartureStatus = Literal["on_time", "delayed", "cancelled"]
VehicleType = Literal["train", "bus"]
DepartureSource = Literal["schedule", "realtime"]

STATUS_ON_TIME: DepartureStatus = "on_time"
STATUS_DELAYED: DepartureStatus = "delayed"
STATUS_CANCELLED: DepartureStatus = "cancelled"

SOURCE_SCHEDULE: DepartureSource = "schedule"
SOURCE_REALTIME: DepartureSource = "realtime"


@dataclass(frozen=True)
class Departure:
    """A single departure from the origin toward the destination.

    Departures produced by the schedule parser are placeholders (delay 0, on time,
    no platform, source "schedule") until real-time data enriches them.
    """

    trip_number: str
    departure_time: str  # Naive local timestamp, e.g. "2024-06-01 08:15"
    arrival_time: str
    line: str
    vehicle_type: VehicleType
    delay: int = 0  # Minutes, negative when running early
    status: DepartureStatus = STATUS_ON_TIME
    platform: str | None = None
    source: DepartureSource = SOURCE_SCHEDULE
