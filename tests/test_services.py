"""Tests for the journey application service."""

from collections.abc import Callable
from datetime import datetime, tzinfo
from unittest.mock import AsyncMock

import pytest

from go_departures.application.services import JourneyService
from go_departures.domain.errors import (
    MissingCredentialError,
    UpstreamDecodeError,
    UpstreamHttpError,
)
from go_departures.domain.models import (
    Departure,
    RealTimeEntry,
    ServiceAlert,
    Station,
    StopTime,
    TripDetail,
)


class MockTransitRepository:
    """Stub repository whose feeds are AsyncMocks."""

    def __init__(self, configured: bool = True) -> None:
        """Initialize with empty feeds."""
        self.configured = configured
        self.get_scheduled_departures = AsyncMock(return_value=[])
        self.get_trip_detail = AsyncMock(return_value=None)
        self.get_next_service = AsyncMock(return_value=[])
        self.get_service_alerts = AsyncMock(return_value=[])
        self.get_stations = AsyncMock(return_value=[])

    @property
    def is_configured(self) -> bool:
        """Whether the stub pretends to have an API key."""
        return self.configured


def fixed_clock(now: datetime) -> Callable[[tzinfo], datetime]:
    """Clock returning a fixed wall time in whatever zone is requested."""

    def clock(tz: tzinfo) -> datetime:
        return now.replace(tzinfo=tz)

    return clock


NOW = datetime(2024, 6, 1, 7, 45)


def _scheduled(trip_number: str, departure_time: str) -> Departure:
    return Departure(
        trip_number=trip_number,
        departure_time=departure_time,
        arrival_time="2024-06-01 09:10:00",
        line="Lakeshore West",
        vehicle_type="train",
    )


def _entry(trip_number: str, computed: str, direction: str = "LW - Union Station") -> RealTimeEntry:
    return RealTimeEntry(
        trip_number=trip_number,
        line_code="LW",
        line_name="Lakeshore West",
        direction_name=direction,
        scheduled_departure_time="2024-06-01 08:15:00",
        computed_departure_time=computed,
        departure_status="",
        scheduled_platform="3",
    )


@pytest.fixture
def repository() -> MockTransitRepository:
    """Configured stub repository."""
    return MockTransitRepository()


@pytest.fixture
def service(repository: MockTransitRepository) -> JourneyService:
    """Journey service with a fixed clock."""
    return JourneyService(repository, clock=fixed_clock(NOW))


class TestGetJourney:
    """Tests for JourneyService.get_journey."""

    @pytest.mark.asyncio
    async def test_queries_schedule_from_current_local_time(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given a fixed clock, when fetching a journey, then the schedule window starts now."""
        await service.get_journey("BU", "UN")

        repository.get_scheduled_departures.assert_awaited_once_with(
            "BU", "UN", "20240601", "0745", 50
        )
        repository.get_next_service.assert_awaited_once_with("BU")
        repository.get_service_alerts.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_merges_realtime_into_schedule(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given schedule and a late live entry, when fetching, then the departure is enriched."""
        repository.get_scheduled_departures.return_value = [
            _scheduled("T100", "2024-06-01 08:15:00")
        ]
        repository.get_next_service.return_value = [_entry("T100", "2024-06-01 08:22:00")]

        result = await service.get_journey("BU", "UN")

        assert not result.is_failed
        assert len(result.departures) == 1
        assert result.departures[0].delay == 7
        assert result.departures[0].status == "delayed"
        assert result.departures[0].platform == "3"
        assert result.last_updated == int(NOW.replace(tzinfo=service._timezone).timestamp() * 1000)

    @pytest.mark.asyncio
    async def test_next_service_failure_returns_plain_schedule(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given the live feed fails, when fetching, then scheduled departures are returned sorted."""
        repository.get_scheduled_departures.return_value = [
            _scheduled("T2", "2024-06-01 09:15:00"),
            _scheduled("T1", "2024-06-01 08:15:00"),
        ]
        repository.get_next_service.side_effect = UpstreamHttpError("boom", status_code=500)

        result = await service.get_journey("BU", "UN")

        assert not result.is_failed
        assert [d.trip_number for d in result.departures] == ["T1", "T2"]
        assert all(d.source == "schedule" for d in result.departures)

    @pytest.mark.asyncio
    async def test_schedule_failure_falls_back_to_realtime_only(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given the schedule feed fails, when fetching, then live entries become departures."""
        repository.get_scheduled_departures.side_effect = UpstreamDecodeError("bad json")
        repository.get_next_service.return_value = [_entry("T100", "2024-06-01 08:15:00")]

        result = await service.get_journey("BU", "UN")

        assert not result.is_failed
        assert [d.trip_number for d in result.departures] == ["T100"]
        assert result.departures[0].source == "realtime"

    @pytest.mark.asyncio
    async def test_schedule_failure_without_matching_live_entries_yields_failed_result(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given the schedule fails and live entries go the other way, when fetching, then the result is failed."""
        repository.get_scheduled_departures.side_effect = UpstreamHttpError(
            "Metrolinx API error: 503", status_code=503
        )
        repository.get_next_service.return_value = [
            _entry("T100", "2024-06-01 08:15:00", direction="LW - Aldershot GO")
        ]

        result = await service.get_journey("BU", "UN")

        assert result.is_failed
        assert result.departures == []
        assert result.error is not None
        assert result.error.status_code == 503

    @pytest.mark.asyncio
    async def test_empty_schedule_without_errors_is_not_failed(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given both feeds succeed with nothing relevant, when fetching, then an empty success is returned."""
        repository.get_next_service.return_value = [
            _entry("T100", "2024-06-01 08:15:00", direction="LW - Aldershot GO")
        ]

        result = await service.get_journey("BU", "UN")

        assert not result.is_failed
        assert result.departures == []

    @pytest.mark.asyncio
    async def test_both_feeds_failing_yields_failed_result(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given schedule and live feeds fail, when fetching, then the result carries error details."""
        repository.get_scheduled_departures.side_effect = UpstreamHttpError(
            "Metrolinx API error: 503", status_code=503
        )
        repository.get_next_service.side_effect = UpstreamHttpError("timeout")
        repository.get_service_alerts.return_value = [
            ServiceAlert(id="1", title="x", description="", severity="info")
        ]

        result = await service.get_journey("BU", "UN")

        assert result.is_failed
        assert result.departures == []
        assert result.alerts == []
        assert result.error is not None
        assert result.error.status_code == 503
        assert "503" in result.error.reason

    @pytest.mark.asyncio
    async def test_alert_failure_yields_empty_alerts(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given the alert feed fails, when fetching, then departures are still returned."""
        repository.get_scheduled_departures.return_value = [
            _scheduled("T1", "2024-06-01 08:15:00")
        ]
        repository.get_service_alerts.side_effect = UpstreamHttpError("down", status_code=502)

        result = await service.get_journey("BU", "UN")

        assert not result.is_failed
        assert result.alerts == []
        assert len(result.departures) == 1

    @pytest.mark.asyncio
    async def test_alerts_are_filtered_to_route(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given alerts for several lines, when fetching, then only relevant ones are kept."""
        repository.get_service_alerts.return_value = [
            ServiceAlert(id="lw", title="", description="", severity="info", affected_routes=("LW",)),
            ServiceAlert(id="le", title="", description="", severity="info", affected_routes=("LE",)),
            ServiceAlert(id="all", title="", description="", severity="info"),
        ]

        result = await service.get_journey("BU", "UN")

        assert [a.id for a in result.alerts] == ["lw", "all"]

    @pytest.mark.asyncio
    async def test_missing_credential_raises_without_requests(self) -> None:
        """Given no API key, when fetching, then MissingCredentialError is raised before any call."""
        repository = MockTransitRepository(configured=False)
        service = JourneyService(repository, clock=fixed_clock(NOW))

        with pytest.raises(MissingCredentialError):
            await service.get_journey("BU", "UN")

        repository.get_scheduled_departures.assert_not_called()
        repository.get_next_service.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given a programming error in a feed, when fetching, then it is not swallowed."""
        repository.get_next_service.side_effect = KeyError("oops")

        with pytest.raises(KeyError):
            await service.get_journey("BU", "UN")


class TestOtherOperations:
    """Tests for stop departures, alerts, stations and trip details."""

    @pytest.mark.asyncio
    async def test_stop_departures_are_sorted_and_limited(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given many live entries, when fetching stop departures, then they are sorted and capped."""
        repository.get_next_service.return_value = [
            RealTimeEntry(
                trip_number=str(i),
                line_code="LW",
                line_name="Lakeshore West",
                direction_name="LW - Aldershot GO",
                scheduled_departure_time=f"2024-06-01 {20 - i:02d}:00:00",
                computed_departure_time=f"2024-06-01 {20 - i:02d}:00:00",
                departure_status="",
            )
            for i in range(12)
        ]

        departures = await service.get_stop_departures("UN", limit=3)

        assert [d.trip_number for d in departures] == ["11", "10", "9"]
        assert all(d.source == "realtime" for d in departures)

    @pytest.mark.asyncio
    async def test_stop_departures_propagate_upstream_errors(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given the live feed fails, when fetching stop departures, then the error propagates."""
        repository.get_next_service.side_effect = UpstreamHttpError("down")

        with pytest.raises(UpstreamHttpError):
            await service.get_stop_departures("UN")

    @pytest.mark.asyncio
    async def test_alerts_are_returned_unfiltered(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given alerts, when fetching all alerts, then none are filtered out."""
        alerts = [
            ServiceAlert(id="le", title="", description="", severity="info", affected_routes=("LE",))
        ]
        repository.get_service_alerts.return_value = alerts

        assert await service.get_alerts() == alerts

    @pytest.mark.asyncio
    async def test_stations_are_passed_through(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given a station directory, when fetching stations, then it is returned as-is."""
        stations = [Station(code="UN", name="Union Station")]
        repository.get_stations.return_value = stations

        assert await service.get_stations() == stations

    @pytest.mark.asyncio
    async def test_trip_detail_queries_current_window(
        self, service: JourneyService, repository: MockTransitRepository
    ) -> None:
        """Given a trip number, when fetching detail, then the journey window starts now."""
        detail = TripDetail(
            trip_number="T1",
            line="Lakeshore West",
            vehicle_type="train",
            stops=[StopTime("BU", "Burlington", "", "08:15")],
        )
        repository.get_trip_detail.return_value = detail

        result = await service.get_trip_detail("T1", "BU", "UN")

        assert result is detail
        repository.get_trip_detail.assert_awaited_once_with(
            "T1", "BU", "UN", "20240601", "0745", 50
        )

    @pytest.mark.asyncio
    async def test_operations_require_credentials(self) -> None:
        """Given no API key, when calling any upstream operation, then MissingCredentialError is raised."""
        service = JourneyService(MockTransitRepository(configured=False), clock=fixed_clock(NOW))

        with pytest.raises(MissingCredentialError):
            await service.get_stop_departures("UN")
        with pytest.raises(MissingCredentialError):
            await service.get_alerts()
        with pytest.raises(MissingCredentialError):
            await service.get_stations()
        with pytest.raises(MissingCredentialError):
            await service.get_trip_detail("T1", "BU", "UN")
