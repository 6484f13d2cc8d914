"""Transit repository port."""

from typing import Protocol

from go_departures.domain.models.departure import Departure
from go_departures.domain.models.real_time_entry import RealTimeEntry
from go_departures.domain.models.service_alert import ServiceAlert
from go_departures.domain.models.station import Station
from go_departures.domain.models.trip_detail import TripDetail


class TransitRepository(Protocol):
    """Port for retrieving normalized data from the transit open-data provider.

    Implementations raise ``UpstreamHttpError`` / ``UpstreamDecodeError`` on feed
    failures and ``MissingCredentialError`` when no API key is configured.
    """

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available for upstream requests."""
        ...

    async def get_scheduled_departures(
        self, origin: str, destination: str, date: str, time: str, max_results: int
    ) -> list[Departure]:
        """Get scheduled trips between two stations from ``date`` (YYYYMMDD) ``time`` (HHMM)."""
        ...

    async def get_trip_detail(
        self,
        trip_number: str,
        origin: str,
        destination: str,
        date: str,
        time: str,
        max_results: int,
    ) -> TripDetail | None:
        """Get the ordered stops of one scheduled trip, or None if it is not in the window."""
        ...

    async def get_next_service(self, stop_code: str) -> list[RealTimeEntry]:
        """Get the real-time next-service entries for a stop."""
        ...

    async def get_service_alerts(self) -> list[ServiceAlert]:
        """Get all active service alerts."""
        ...

    async def get_stations(self) -> list[Station]:
        """Get all stations."""
        ...
