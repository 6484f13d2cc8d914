"""Application services (use cases) for journey aggregation."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, TypeVar
from zoneinfo import ZoneInfo

from go_departures.application.alert_filter import filter_alerts
from go_departures.application.reconciler import (
    departure_from_entry,
    reconcile,
    sort_departures,
)
from go_departures.domain.errors import (
    MissingCredentialError,
    UpstreamError,
    UpstreamHttpError,
)
from go_departures.domain.models import (
    Departure,
    ErrorDetails,
    JourneyResult,
    LineTopology,
    ServiceAlert,
    Station,
    TripDetail,
)
from go_departures.domain.topology import GO_TOPOLOGY

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from go_departures.domain.ports import TransitRepository

T = TypeVar("T")

DEFAULT_TIMEZONE = "America/Toronto"
DEFAULT_JOURNEY_MAX_RESULTS = 50


def _error_details(error: UpstreamError) -> ErrorDetails:
    status_code = error.status_code if isinstance(error, UpstreamHttpError) else None
    return ErrorDetails(status_code=status_code, reason=str(error))


class JourneyService:
    """Builds real-time-enriched departure lists for origin/destination pairs."""

    def __init__(
        self,
        repository: "TransitRepository",
        topology: LineTopology = GO_TOPOLOGY,
        timezone: str = DEFAULT_TIMEZONE,
        journey_max_results: int = DEFAULT_JOURNEY_MAX_RESULTS,
        clock: Callable[[tzinfo], datetime] = datetime.now,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Source of normalized upstream data.
            topology: Static line topology used for direction and alert filtering.
            timezone: IANA zone the schedule is expressed in.
            journey_max_results: Result cap for the scheduled-journey query. Kept
                generous so later same-day departures are included.
            clock: Returns the current time in a given zone; injectable for tests.
        """
        self._repository = repository
        self._topology = topology
        self._timezone = ZoneInfo(timezone)
        self._journey_max_results = journey_max_results
        self._clock = clock

    @property
    def topology(self) -> LineTopology:
        """The line topology this service filters against."""
        return self._topology

    def _ensure_configured(self) -> None:
        if not self._repository.is_configured:
            raise MissingCredentialError()

    def _now(self) -> datetime:
        return self._clock(self._timezone)

    def _query_window(self) -> tuple[str, str]:
        """Current network-local date (YYYYMMDD) and time (HHMM)."""
        now = self._now()
        return now.strftime("%Y%m%d"), now.strftime("%H%M")

    def _last_updated(self) -> int:
        return int(self._now().timestamp() * 1000)

    @staticmethod
    def _settle(
        result: "T | BaseException", feed: str
    ) -> tuple["T | None", UpstreamError | None]:
        """Split a gathered result into (value, upstream error).

        Upstream failures are absorbed; anything else is re-raised.
        """
        if isinstance(result, UpstreamError):
            logger.warning(f"{feed} feed unavailable: {result}")
            return None, result
        if isinstance(result, BaseException):
            raise result
        return result, None

    def _failed_journey(
        self, origin: str, destination: str, error: UpstreamError
    ) -> JourneyResult:
        logger.error(f"Journey {origin} -> {destination} unavailable: {error}")
        return JourneyResult(
            departures=[],
            alerts=[],
            last_updated=self._last_updated(),
            error=_error_details(error),
        )

    async def get_journey(self, origin: str, destination: str) -> JourneyResult:
        """Get departures from ``origin`` toward ``destination`` with relevant alerts.

        Schedule, next-service and alert feeds are fetched concurrently and degrade
        independently:

        - next-service failure leaves scheduled departures unenriched;
        - schedule failure falls back to real-time-only departures, and is
          reported as a failed result when no live departure matches the route;
        - both failing yields an empty result carrying error details;
        - alert failure yields an empty alert list.

        Raises:
            MissingCredentialError: If no API key is configured. No request is made.
        """
        self._ensure_configured()
        date_str, time_str = self._query_window()
        logger.debug(f"Fetching journey {origin} -> {destination} from {date_str} {time_str}")

        schedule_result, next_service_result, alerts_result = await asyncio.gather(
            self._repository.get_scheduled_departures(
                origin, destination, date_str, time_str, self._journey_max_results
            ),
            self._repository.get_next_service(origin),
            self._repository.get_service_alerts(),
            return_exceptions=True,
        )

        scheduled, schedule_error = self._settle(schedule_result, "Schedule")
        entries, next_service_error = self._settle(next_service_result, "Next service")
        alerts, _ = self._settle(alerts_result, "Service alert")

        if schedule_error is not None and next_service_error is not None:
            return self._failed_journey(origin, destination, schedule_error)

        if entries is None:
            departures = sort_departures(scheduled or [])
        else:
            departures = reconcile(scheduled or [], entries, origin, destination, self._topology)

        if schedule_error is not None and not departures:
            return self._failed_journey(origin, destination, schedule_error)

        relevant_alerts = filter_alerts(alerts or [], origin, destination, self._topology)

        logger.info(
            f"Journey {origin} -> {destination}: {len(departures)} departure(s), "
            f"{len(relevant_alerts)} alert(s)"
        )
        return JourneyResult(
            departures=departures,
            alerts=relevant_alerts,
            last_updated=self._last_updated(),
        )

    async def get_stop_departures(self, stop_code: str, limit: int = 10) -> list[Departure]:
        """Get upcoming live departures at a stop regardless of direction.

        Raises:
            MissingCredentialError: If no API key is configured.
            UpstreamError: If the next-service feed fails.
        """
        self._ensure_configured()
        entries = await self._repository.get_next_service(stop_code)
        return sort_departures(departure_from_entry(entry) for entry in entries)[:limit]

    async def get_alerts(self) -> list[ServiceAlert]:
        """Get every active service alert, unfiltered.

        Raises:
            MissingCredentialError: If no API key is configured.
            UpstreamError: If the alerts feed fails.
        """
        self._ensure_configured()
        return await self._repository.get_service_alerts()

    async def get_stations(self) -> list[Station]:
        """Get the station directory.

        Raises:
            MissingCredentialError: If no API key is configured.
            UpstreamError: If the stops feed fails.
        """
        self._ensure_configured()
        return await self._repository.get_stations()

    async def get_trip_detail(
        self, trip_number: str, origin: str, destination: str
    ) -> TripDetail | None:
        """Get the ordered stops of a trip found in today's journey window.

        Raises:
            MissingCredentialError: If no API key is configured.
            UpstreamError: If the journey feed fails.
        """
        self._ensure_configured()
        date_str, time_str = self._query_window()
        return await self._repository.get_trip_detail(
            trip_number, origin, destination, date_str, time_str, self._journey_max_results
        )
