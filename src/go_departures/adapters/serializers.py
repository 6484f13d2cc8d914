"""JSON serialization of domain models for the HTTP API (camelCase wire format)."""

from typing import Any

from go_departures.domain.models import (
    Departure,
    JourneyResult,
    Line,
    ServiceAlert,
    Station,
    TripDetail,
)


def departure_to_dict(departure: Departure) -> dict[str, Any]:
    """Serialize a departure. ``platform`` is omitted when unknown."""
    data: dict[str, Any] = {
        "tripNumber": departure.trip_number,
        "departureTime": departure.departure_time,
        "arrivalTime": departure.arrival_time,
        "delay": departure.delay,
        "status": departure.status,
        "line": departure.line,
        "vehicleType": departure.vehicle_type,
        "source": departure.source,
    }
    if departure.platform is not None:
        data["platform"] = departure.platform
    return data


def alert_to_dict(alert: ServiceAlert) -> dict[str, Any]:
    return {
        "id": alert.id,
        "title": alert.title,
        "description": alert.description,
        "severity": alert.severity,
        "affectedRoutes": list(alert.affected_routes),
    }


def journey_to_dict(result: JourneyResult) -> dict[str, Any]:
    """Serialize a journey result; ``error`` is present only for failed results."""
    data: dict[str, Any] = {
        "departures": [departure_to_dict(d) for d in result.departures],
        "alerts": [alert_to_dict(a) for a in result.alerts],
        "lastUpdated": result.last_updated,
    }
    if result.error is not None:
        data["error"] = "Failed to fetch journey data"
        data["details"] = result.error.model_dump()
    return data


def station_to_dict(station: Station) -> dict[str, Any]:
    return {
        "code": station.code,
        "name": station.name,
        "locationName": station.location_name,
        "locationType": station.location_type,
        "latitude": station.latitude,
        "longitude": station.longitude,
    }


def trip_to_dict(trip: TripDetail) -> dict[str, Any]:
    return {
        "tripNumber": trip.trip_number,
        "line": trip.line,
        "vehicleType": trip.vehicle_type,
        "stops": [
            {
                "stationCode": stop.station_code,
                "stationName": stop.station_name,
                "arrivalTime": stop.arrival_time,
                "departureTime": stop.departure_time,
                **({"platform": stop.platform} if stop.platform is not None else {}),
            }
            for stop in trip.stops
        ],
    }


def line_to_dict(line: Line) -> dict[str, Any]:
    return {
        "id": line.id,
        "name": line.name,
        "color": line.color,
        "stationCodes": list(line.station_codes),
    }
