"""Parser for the Metrolinx all-stops response."""

from typing import Any

from go_departures.adapters.metrolinx_api.constants import (
    STATION_FALLBACK_LIMIT,
    STATION_LOCATION_TYPE_MARKERS,
)
from go_departures.adapters.metrolinx_api.payload import as_list, dig, first_float, first_text
from go_departures.domain.models import Station


class StationParser:
    """Parses the all-stops feed into the station directory."""

    @staticmethod
    def _is_station(stop: dict[str, Any]) -> bool:
        location_type = first_text(stop, "LocationType")
        return any(marker in location_type for marker in STATION_LOCATION_TYPE_MARKERS)

    @staticmethod
    def _parse_station(stop: dict[str, Any]) -> Station | None:
        code = first_text(stop, "LocationCode", "StopCode", "Code")
        if not code:
            return None
        return Station(
            code=code,
            name=first_text(stop, "LocationName", "StopName", "Name") or code,
            location_name=first_text(stop, "LocationName") or None,
            location_type=first_text(stop, "LocationType") or None,
            latitude=first_float(stop, "Latitude", "StopLatitude"),
            longitude=first_float(stop, "Longitude", "StopLongitude"),
        )

    @staticmethod
    def parse_stations(data: Any) -> list[Station]:
        """Parse stops, keeping rail stations.

        When no stop carries a recognizable station location type, the first
        200 stops are returned instead.
        """
        stops = dig(data, "Stations", "Station")
        if stops is None:
            stops = dig(data, "Stops")
        stops = [stop for stop in as_list(stops) if isinstance(stop, dict)]

        train_stops = [stop for stop in stops if StationParser._is_station(stop)]
        selected = train_stops or stops[:STATION_FALLBACK_LIMIT]

        return [
            station
            for stop in selected
            if (station := StationParser._parse_station(stop)) is not None
        ]
