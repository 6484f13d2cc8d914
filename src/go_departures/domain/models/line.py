"""Line and line topology domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Line:
    """A transit line with its stations in one canonical traversal order."""

    id: str
    name: str
    station_codes: tuple[str, ...]
    color: str = ""

    def contains(self, station_code: str) -> bool:
        """Whether the line calls at the given station."""
        return station_code in self.station_codes

    def index_of(self, station_code: str) -> int | None:
        """Position of the station along the line, or None if it is not on it."""
        try:
            return self.station_codes.index(station_code)
        except ValueError:
            return None


@dataclass(frozen=True)
class LineTopology:
    """Static network description: lines in declaration order plus station names.

    Declaration order matters: when a station pair is served by more than one
    line, the first declared line wins.
    """

    lines: tuple[Line, ...]
    station_names: Mapping[str, str] = field(default_factory=dict)
    central_terminal: str | None = None
    central_terminal_keyword: str | None = None  # Short name used in direction text

    def line_for_route(self, origin: str, destination: str) -> Line | None:
        """Return the first line serving both stations, or None."""
        for line in self.lines:
            if line.contains(origin) and line.contains(destination):
                return line
        return None

    def get_line(self, line_id: str) -> Line | None:
        """Look a line up by its code."""
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def lines_for_station(self, station_code: str) -> list[Line]:
        """All lines calling at the station, in declaration order."""
        return [line for line in self.lines if line.contains(station_code)]

    def station_name(self, station_code: str) -> str | None:
        """Display name for a station code, if known."""
        return self.station_names.get(station_code)
