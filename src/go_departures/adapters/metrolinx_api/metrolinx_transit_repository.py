"""Transit repository adapter backed by the Metrolinx OpenData API."""

import logging
from typing import TYPE_CHECKING

from go_departures.adapters.metrolinx_api.alert_parser import AlertParser
from go_departures.adapters.metrolinx_api.constants import (
    ALL_STOPS_ENDPOINT,
    JOURNEY_ENDPOINT,
    METROLINX_BASE_URL,
    NEXT_SERVICE_ENDPOINT,
    SERVICE_ALERTS_ENDPOINT,
)
from go_departures.adapters.metrolinx_api.http_client import (
    DEFAULT_TIMEOUT_SECONDS,
    MetrolinxHttpClient,
)
from go_departures.adapters.metrolinx_api.next_service_parser import NextServiceParser
from go_departures.adapters.metrolinx_api.schedule_parser import ScheduleParser
from go_departures.adapters.metrolinx_api.station_parser import StationParser
from go_departures.domain.models import (
    Departure,
    LineTopology,
    RealTimeEntry,
    ServiceAlert,
    Station,
    TripDetail,
)
from go_departures.domain.ports.transit_repository import TransitRepository
from go_departures.domain.topology import GO_TOPOLOGY

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class MetrolinxTransitRepository(TransitRepository):
    """Adapter for the Metrolinx OpenData feeds.

    Each method issues exactly one upstream request and normalizes the response.
    Upstream errors propagate unchanged; degrading is left to the caller.
    """

    def __init__(
        self,
        session: "ClientSession",
        api_key: str | None,
        base_url: str = METROLINX_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        topology: LineTopology = GO_TOPOLOGY,
    ) -> None:
        """Initialize with an aiohttp session and the API key.

        Args:
            session: Shared aiohttp ClientSession.
            api_key: Metrolinx OpenData key; None means unconfigured.
            base_url: API base URL.
            timeout_seconds: Total timeout per upstream request.
            topology: Used to name stations in trip details.
        """
        self._http_client = MetrolinxHttpClient(
            session, api_key, base_url=base_url, timeout_seconds=timeout_seconds
        )
        self._topology = topology

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available for upstream requests."""
        return self._http_client.is_configured

    @staticmethod
    def _journey_endpoint(
        origin: str, destination: str, date: str, time: str, max_results: int
    ) -> str:
        return JOURNEY_ENDPOINT.format(
            date=date,
            origin=origin,
            destination=destination,
            time=time,
            max_results=max_results,
        )

    async def get_scheduled_departures(
        self, origin: str, destination: str, date: str, time: str, max_results: int
    ) -> list[Departure]:
        """Get scheduled trips from origin to destination starting at date/time.

        Args:
            origin: Origin station code.
            destination: Destination station code.
            date: Service date as YYYYMMDD in network-local time.
            time: Start time as HHMM in network-local time.
            max_results: Maximum number of journeys to request.

        Returns:
            Deduplicated placeholder departures in feed order.
        """
        data = await self._http_client.fetch(
            self._journey_endpoint(origin, destination, date, time, max_results)
        )
        departures = ScheduleParser.parse_departures(data)
        logger.debug(f"Schedule {origin} -> {destination}: {len(departures)} trip(s)")
        return departures

    async def get_trip_detail(
        self,
        trip_number: str,
        origin: str,
        destination: str,
        date: str,
        time: str,
        max_results: int,
    ) -> TripDetail | None:
        """Get one trip's stops from the journey window, or None if it is absent."""
        data = await self._http_client.fetch(
            self._journey_endpoint(origin, destination, date, time, max_results)
        )
        return ScheduleParser.parse_trip_detail(data, trip_number, self._topology)

    async def get_next_service(self, stop_code: str) -> list[RealTimeEntry]:
        """Get the real-time next-service entries for a stop."""
        data = await self._http_client.fetch(NEXT_SERVICE_ENDPOINT.format(stop_code=stop_code))
        entries = NextServiceParser.parse_entries(data)
        logger.debug(f"Next service at {stop_code}: {len(entries)} entries")
        return entries

    async def get_service_alerts(self) -> list[ServiceAlert]:
        """Get all active service alerts."""
        data = await self._http_client.fetch(SERVICE_ALERTS_ENDPOINT)
        return AlertParser.parse_alerts(data)

    async def get_stations(self) -> list[Station]:
        """Get the station directory."""
        data = await self._http_client.fetch(ALL_STOPS_ENDPOINT)
        stations = StationParser.parse_stations(data)
        logger.info(f"Loaded {len(stations)} station(s)")
        return stations
