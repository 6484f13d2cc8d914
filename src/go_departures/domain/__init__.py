"""Domain layer - core business logic and models."""

from go_departures.domain.errors import (
    MissingCredentialError,
    TransitError,
    UpstreamDecodeError,
    UpstreamError,
    UpstreamHttpError,
)
from go_departures.domain.models import (
    Departure,
    JourneyResult,
    Line,
    LineTopology,
    RealTimeEntry,
    ServiceAlert,
    Station,
)
from go_departures.domain.ports import TransitRepository

__all__ = [
    "Departure",
    "JourneyResult",
    "Line",
    "LineTopology",
    "MissingCredentialError",
    "RealTimeEntry",
    "ServiceAlert",
    "Station",
    "TransitError",
    "TransitRepository",
    "UpstreamDecodeError",
    "UpstreamError",
    "UpstreamHttpError",
]
