"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A stop listed by the all-stops feed."""

    code: str
    name: str
    location_name: str | None = None
    location_type: str | None = None
    latitude: float | None = None
    longitude: float | None = None
