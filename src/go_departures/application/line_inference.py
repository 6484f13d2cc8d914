"""Line inference for origin/destination pairs and real-time direction filtering.

The next-service feed only reports a free-text direction ("LW - Aldershot GO"),
never the stops a service calls at. Whether an entry serves the requested
destination is therefore inferred from the static topology. Everything heuristic
about that lives here so the reconciler can stay purely about merging.
"""

import logging
import re

from go_departures.domain.models import Line, LineTopology, RealTimeEntry

logger = logging.getLogger(__name__)

# Separates the line prefix from the terminal name in direction text
DIRECTION_SEPARATOR = " - "


def line_for_route(origin: str, destination: str, topology: LineTopology) -> Line | None:
    """Return the first declared line serving both stations, or None.

    Interchange pairs served by several lines resolve to the first line in
    declaration order.
    """
    return topology.line_for_route(origin, destination)


def _terminal_text(direction_name: str) -> str:
    """Extract the stated terminal from direction text."""
    if DIRECTION_SEPARATOR in direction_name:
        return direction_name.split(DIRECTION_SEPARATOR, 1)[1].strip()
    return direction_name.strip()


def resolve_terminal(terminal: str, line: Line, topology: LineTopology) -> str | None:
    """Resolve a terminal name to a station code on the given line.

    Tries, in order: the text as a station code, an exact display name match, the
    display name contained in the text, and the text contained in the display name.
    """
    if not terminal:
        return None

    terminal_lower = terminal.lower()
    if terminal.upper() in line.station_codes:
        return terminal.upper()

    named = [
        (code, name.lower())
        for code in line.station_codes
        if (name := topology.station_name(code))
    ]
    for code, name in named:
        if name == terminal_lower:
            return code
    for code, name in named:
        if name in terminal_lower:
            return code
    for code, name in named:
        if terminal_lower in name:
            return code
    return None


def _mentions_central_terminal(direction_lower: str, topology: LineTopology) -> bool:
    keyword = topology.central_terminal_keyword
    if not keyword:
        return False
    return re.search(rf"\b{re.escape(keyword.lower())}\b", direction_lower) is not None


def is_real_time_entry_toward_destination(
    entry: RealTimeEntry, origin: str, destination: str, topology: LineTopology
) -> bool:
    """Decide whether a next-service entry at ``origin`` passes through ``destination``.

    Display-name matching is a substring heuristic and can give false positives
    when one station name contains another.
    """
    line = topology.line_for_route(origin, destination)
    if line is not None and entry.line_code != line.id:
        return False

    direction_lower = entry.direction_name.lower()

    destination_name = topology.station_name(destination)
    if destination_name and destination_name.lower() in direction_lower:
        return True

    if destination == topology.central_terminal and _mentions_central_terminal(
        direction_lower, topology
    ):
        return True

    if line is None:
        return False

    terminal_code = resolve_terminal(_terminal_text(entry.direction_name), line, topology)
    if terminal_code is None:
        logger.debug(
            f"Could not resolve terminal for trip {entry.trip_number} "
            f"from direction '{entry.direction_name}' on line {line.id}"
        )
        return False

    origin_index = line.index_of(origin)
    destination_index = line.index_of(destination)
    terminal_index = line.index_of(terminal_code)
    if origin_index is None or destination_index is None or terminal_index is None:
        return False

    return (
        origin_index <= destination_index <= terminal_index
        or terminal_index <= destination_index <= origin_index
    )
