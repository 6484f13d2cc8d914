"""Parser for Metrolinx scheduled-journey responses.

Response shape (fields vary between revisions of the feed)::

    {"SchJourneys": [
        {"Services": [
            {"StartTime": "2024-06-01 08:15:00", "EndTime": "...",
             "Trips": {"Trip": [
                 {"Number": "1234", "Line": "LW", "Display": "Lakeshore West",
                  "Type": "T", "Stops": {"Stop": [{"Code": "BU", "Time": "08:15"}, ...]}}
             ]}}
        ]}
    ]}

``Trips.Trip`` and ``Stops.Stop`` may be a single object instead of a list.
"""

import logging
from collections.abc import Iterator
from typing import Any

from go_departures.adapters.metrolinx_api.payload import as_dict, as_list, dig, first_text
from go_departures.domain.models import Departure, LineTopology, StopTime, TripDetail
from go_departures.domain.topology import infer_vehicle_type

logger = logging.getLogger(__name__)


class ScheduleParser:
    """Normalizes scheduled-journey responses into placeholder departures."""

    @staticmethod
    def _iter_trips(data: Any) -> Iterator[tuple[dict[str, Any], dict[str, Any]]]:
        """Yield (service, trip) pairs across all journeys, in feed order."""
        for journey in as_list(dig(data, "SchJourneys")):
            for service_data in as_list(as_dict(journey).get("Services")):
                service = as_dict(service_data)
                for trip in as_list(dig(service, "Trips", "Trip")):
                    if isinstance(trip, dict):
                        yield service, trip

    @staticmethod
    def _trip_stops(trip: dict[str, Any]) -> list[dict[str, Any]]:
        return [stop for stop in as_list(dig(trip, "Stops", "Stop")) if isinstance(stop, dict)]

    @staticmethod
    def _line_display(trip: dict[str, Any]) -> tuple[str, str]:
        """Return (line code, display name) for a trip."""
        line_code = first_text(trip, "Line")
        line_name = first_text(trip, "Display") or line_code
        return line_code, line_name or f"Route {line_code}"

    @staticmethod
    def _parse_departure(service: dict[str, Any], trip: dict[str, Any]) -> Departure:
        line_code, line_name = ScheduleParser._line_display(trip)
        return Departure(
            trip_number=first_text(trip, "Number"),
            departure_time=first_text(service, "StartTime"),
            arrival_time=first_text(service, "EndTime"),
            line=line_name,
            vehicle_type=infer_vehicle_type(line_code, line_name, first_text(trip, "Type")),
        )

    @staticmethod
    def parse_departures(data: Any) -> list[Departure]:
        """Parse a journey response into scheduled departures.

        The same trip can appear in several journeys when query windows overlap;
        the first occurrence wins. Trips without a number or stops are skipped.

        Args:
            data: Decoded JSON from the journey endpoint.

        Returns:
            Departures with delay 0, status on_time and no platform.
        """
        by_trip: dict[str, Departure] = {}
        skipped = 0

        for service, trip in ScheduleParser._iter_trips(data):
            trip_number = first_text(trip, "Number")
            if not trip_number or not ScheduleParser._trip_stops(trip):
                skipped += 1
                continue
            if trip_number in by_trip:
                continue
            by_trip[trip_number] = ScheduleParser._parse_departure(service, trip)

        if skipped:
            logger.debug(f"Skipped {skipped} malformed trip record(s) in journey response")
        return list(by_trip.values())

    @staticmethod
    def _parse_stop_time(stop: dict[str, Any], topology: LineTopology) -> StopTime | None:
        code = first_text(stop, "Code", "StopCode", "LocationCode")
        if not code:
            return None
        return StopTime(
            station_code=code,
            station_name=topology.station_name(code) or first_text(stop, "Name") or code,
            arrival_time=first_text(stop, "ArrivalTime", "Time"),
            departure_time=first_text(stop, "DepartureTime", "Time"),
            platform=first_text(stop, "Platform", "Track") or None,
        )

    @staticmethod
    def parse_trip_detail(
        data: Any, trip_number: str, topology: LineTopology
    ) -> TripDetail | None:
        """Find one trip in a journey response and return its ordered stops.

        Returns None when the trip is not present.
        """
        for _service, trip in ScheduleParser._iter_trips(data):
            if first_text(trip, "Number") != trip_number:
                continue

            stops = [
                stop_time
                for stop in ScheduleParser._trip_stops(trip)
                if (stop_time := ScheduleParser._parse_stop_time(stop, topology)) is not None
            ]
            line_code, line_name = ScheduleParser._line_display(trip)
            return TripDetail(
                trip_number=trip_number,
                line=line_name,
                vehicle_type=infer_vehicle_type(line_code, line_name, first_text(trip, "Type")),
                stops=stops,
            )

        return None
