"""Trip detail domain models."""

from dataclasses import dataclass

from .departure import VehicleType


@dataclass(frozen=True)
class StopTime:
    """A scheduled call of a trip at one station."""

    station_code: str
    station_name: str
    arrival_time: str
    departure_time: str
    platform: str | None = None


@dataclass(frozen=True)
class TripDetail:
    """The ordered stops of a single trip."""

    trip_number: str
    line: str
    vehicle_type: VehicleType
    stops: list[StopTime]
