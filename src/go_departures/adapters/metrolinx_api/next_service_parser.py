"""Parser for Metrolinx next-service (real-time) responses."""

import logging
from typing import Any

from go_departures.adapters.metrolinx_api.payload import as_list, dig, first_text
from go_departures.domain.models import RealTimeEntry

logger = logging.getLogger(__name__)


class NextServiceParser:
    """Parses ``NextService.Lines`` into RealTimeEntry records."""

    @staticmethod
    def _parse_entry(line: dict[str, Any]) -> RealTimeEntry | None:
        trip_number = first_text(line, "TripNumber")
        if not trip_number:
            return None

        return RealTimeEntry(
            trip_number=trip_number,
            line_code=first_text(line, "LineCode"),
            line_name=first_text(line, "LineName"),
            direction_name=first_text(line, "DirectionName", "Direction"),
            scheduled_departure_time=first_text(line, "ScheduledDepartureTime"),
            computed_departure_time=first_text(line, "ComputedDepartureTime"),
            departure_status=first_text(line, "DepartureStatus"),
            scheduled_platform=first_text(line, "ScheduledPlatform") or None,
            actual_platform=first_text(line, "ActualPlatform") or None,
            service_type=first_text(line, "ServiceType"),
        )

    @staticmethod
    def parse_entries(data: Any) -> list[RealTimeEntry]:
        """Parse a next-service response.

        Args:
            data: Decoded JSON from the next-service endpoint.

        Returns:
            One entry per reported service; entries without a trip number are skipped.
        """
        entries = []
        for line in as_list(dig(data, "NextService", "Lines")):
            if not isinstance(line, dict):
                continue
            entry = NextServiceParser._parse_entry(line)
            if entry is None:
                logger.debug(f"Skipping next-service line without trip number: {line}")
                continue
            entries.append(entry)
        return entries
