"""Reconciliation of scheduled departures with real-time next-service data."""

import dataclasses
import logging
import math
from collections.abc import Iterable

from go_departures.application.line_inference import is_real_time_entry_toward_destination
from go_departures.domain.models import (
    SOURCE_REALTIME,
    STATUS_CANCELLED,
    STATUS_DELAYED,
    STATUS_ON_TIME,
    Departure,
    DepartureStatus,
    LineTopology,
    RealTimeEntry,
)
from go_departures.domain.timeparse import parse_transit_time
from go_departures.domain.topology import infer_vehicle_type

logger = logging.getLogger(__name__)

# Delays above this many minutes count as "delayed" rather than ordinary variance
DELAY_THRESHOLD_MINUTES = 5

CANCELLED_STATUS_CODE = "C"
LATE_STATUS_CODE = "L"


def compute_delay_minutes(scheduled_time: str, computed_time: str) -> int:
    """Minutes between scheduled and computed departure, rounded half up.

    Returns 0 when either time is missing, unparsable, or both are equal. Early
    departures yield a negative delay.
    """
    if not scheduled_time or not computed_time or scheduled_time == computed_time:
        return 0

    scheduled = parse_transit_time(scheduled_time)
    computed = parse_transit_time(computed_time)
    if scheduled is None or computed is None:
        logger.debug(f"Unparsable real-time timestamps: '{scheduled_time}' / '{computed_time}'")
        return 0

    minutes = (computed - scheduled).total_seconds() / 60
    return math.floor(minutes + 0.5)


def derive_status(delay_minutes: int, status_code: str) -> DepartureStatus:
    """Map delay and the upstream status code to a departure status."""
    if status_code == CANCELLED_STATUS_CODE:
        return STATUS_CANCELLED
    if delay_minutes > DELAY_THRESHOLD_MINUTES or status_code == LATE_STATUS_CODE:
        return STATUS_DELAYED
    return STATUS_ON_TIME


def _entry_platform(entry: RealTimeEntry) -> str | None:
    return entry.actual_platform or entry.scheduled_platform or None


def enrich_departure(departure: Departure, entry: RealTimeEntry) -> Departure:
    """Overlay real-time delay, status and platform onto a scheduled departure."""
    delay = compute_delay_minutes(entry.scheduled_departure_time, entry.computed_departure_time)
    return dataclasses.replace(
        departure,
        departure_time=entry.scheduled_departure_time or departure.departure_time,
        platform=_entry_platform(entry),
        delay=delay,
        status=derive_status(delay, entry.departure_status),
    )


def departure_from_entry(entry: RealTimeEntry) -> Departure:
    """Build a departure for a live service that is not in the schedule query."""
    delay = compute_delay_minutes(entry.scheduled_departure_time, entry.computed_departure_time)
    return Departure(
        trip_number=entry.trip_number,
        departure_time=entry.scheduled_departure_time,
        arrival_time="",
        line=entry.line_name or entry.line_code,
        vehicle_type=infer_vehicle_type(entry.line_code, entry.line_name, entry.service_type),
        delay=delay,
        status=derive_status(delay, entry.departure_status),
        platform=_entry_platform(entry),
        source=SOURCE_REALTIME,
    )


def sort_departures(departures: Iterable[Departure]) -> list[Departure]:
    """Order departures by departure time.

    Departures with an empty or unparsable departure time are dropped rather than
    placed arbitrarily. Equal times keep their input order.
    """
    timed = []
    for departure in departures:
        parsed = parse_transit_time(departure.departure_time)
        if parsed is None:
            if departure.departure_time:
                logger.debug(
                    f"Dropping trip {departure.trip_number} with unparsable departure time "
                    f"'{departure.departure_time}'"
                )
            continue
        timed.append((parsed, departure))

    timed.sort(key=lambda pair: pair[0])
    return [departure for _, departure in timed]


def reconcile(
    scheduled: list[Departure],
    entries: list[RealTimeEntry],
    origin: str,
    destination: str,
    topology: LineTopology,
) -> list[Departure]:
    """Merge scheduled departures with real-time entries for the origin station.

    Only entries heading toward the destination take part. Matching is by trip
    number; a matched entry enriches the scheduled departure and is consumed.
    Unconsumed entries are live services missing from the schedule query and are
    appended. The result is sorted by departure time.
    """
    relevant = [
        entry
        for entry in entries
        if is_real_time_entry_toward_destination(entry, origin, destination, topology)
    ]
    logger.debug(
        f"{len(relevant)} of {len(entries)} real-time entries at {origin} head toward {destination}"
    )

    # Last write wins for duplicate trip numbers
    lookup: dict[str, RealTimeEntry] = {}
    for entry in relevant:
        lookup[entry.trip_number] = entry

    merged: list[Departure] = []
    for departure in scheduled:
        entry = lookup.pop(departure.trip_number, None)
        if entry is None:
            merged.append(departure)
        else:
            merged.append(enrich_departure(departure, entry))

    merged.extend(departure_from_entry(entry) for entry in lookup.values())

    return sort_departures(merged)
