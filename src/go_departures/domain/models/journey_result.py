"""Journey result domain model."""

from dataclasses import dataclass

from .departure import Departure
from .error_details import ErrorDetails
from .service_alert import ServiceAlert


@dataclass(frozen=True)
class JourneyResult:
    """Snapshot of departures and alerts for an origin/destination pair.

    ``error`` distinguishes "data temporarily unavailable" from a successful
    result that simply has no departures.
    """

    departures: list[Departure]
    alerts: list[ServiceAlert]
    last_updated: int  # Epoch milliseconds
    error: ErrorDetails | None = None

    @property
    def is_failed(self) -> bool:
        """Whether the journey data could not be fetched."""
        return self.error is not None
