"""Starlette JSON API exposing the journey service to the mobile client."""

import logging
import time
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from go_departures.adapters.serializers import (
    alert_to_dict,
    departure_to_dict,
    journey_to_dict,
    line_to_dict,
    station_to_dict,
    trip_to_dict,
)
from go_departures.adapters.web.rate_limit_middleware import RateLimitMiddleware
from go_departures.domain.errors import MissingCredentialError, UpstreamError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from go_departures.application.services import JourneyService


def _now_millis() -> int:
    return int(time.time() * 1000)


def _route_params(request: Request) -> tuple[str, str] | None:
    origin = request.query_params.get("origin", "").strip()
    destination = request.query_params.get("destination", "").strip()
    if not origin or not destination:
        return None
    return origin, destination


async def _missing_credential_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"[{request.url.path}] METROLINX_API_KEY not configured")
    return JSONResponse({"error": "API key not configured"}, status_code=500)


def create_app(
    service: "JourneyService",
    rate_limit_per_minute: int = 0,
    stop_departures_limit: int = 10,
) -> Starlette:
    """Build the API application around a journey service.

    Args:
        service: The journey service backing every endpoint.
        rate_limit_per_minute: Per-IP request quota; 0 disables rate limiting.
        stop_departures_limit: Maximum departures returned by /api/departures.
    """

    async def health(_request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    async def lines(request: Request) -> JSONResponse:
        station = request.query_params.get("station", "").strip()
        topology = service.topology
        selected = topology.lines_for_station(station) if station else topology.lines
        return JSONResponse({"lines": [line_to_dict(line) for line in selected]})

    async def stations(_request: Request) -> JSONResponse:
        try:
            result = await service.get_stations()
        except UpstreamError as e:
            logger.error(f"[stations] Error fetching stations: {e}")
            return JSONResponse(
                {"error": "Failed to fetch stations", "details": str(e), "stations": []},
                status_code=502,
            )
        logger.info(f"[stations] Returning {len(result)} stations")
        return JSONResponse({"stations": [station_to_dict(s) for s in result]})

    async def journey(request: Request) -> JSONResponse:
        params = _route_params(request)
        if params is None:
            return JSONResponse({"error": "Origin and destination required"}, status_code=400)

        result = await service.get_journey(*params)
        status_code = 502 if result.is_failed else 200
        return JSONResponse(journey_to_dict(result), status_code=status_code)

    async def stop_departures(request: Request) -> JSONResponse:
        stop = request.query_params.get("stop", "").strip()
        if not stop:
            return JSONResponse({"error": "Stop code required"}, status_code=400)

        try:
            departures = await service.get_stop_departures(stop, limit=stop_departures_limit)
        except UpstreamError as e:
            logger.error(f"[departures] Error fetching departures for {stop}: {e}")
            return JSONResponse(
                {"error": "Failed to fetch departures", "departures": []}, status_code=502
            )
        return JSONResponse(
            {
                "departures": [departure_to_dict(d) for d in departures],
                "lastUpdated": _now_millis(),
            }
        )

    async def alerts(_request: Request) -> JSONResponse:
        try:
            result = await service.get_alerts()
        except UpstreamError as e:
            logger.error(f"[alerts] Error fetching alerts: {e}")
            return JSONResponse({"alerts": []})
        return JSONResponse({"alerts": [alert_to_dict(a) for a in result]})

    async def trip(request: Request) -> JSONResponse:
        trip_number = request.path_params["trip_number"]
        params = _route_params(request)
        if params is None:
            return JSONResponse({"error": "Origin and destination required"}, status_code=400)

        try:
            detail = await service.get_trip_detail(trip_number, *params)
        except UpstreamError as e:
            logger.error(f"[trip] Error fetching trip {trip_number}: {e}")
            return JSONResponse({"error": "Failed to fetch trip details"}, status_code=502)
        if detail is None:
            return JSONResponse({"error": f"Trip {trip_number} not found"}, status_code=404)
        return JSONResponse(trip_to_dict(detail))

    middleware = []
    if rate_limit_per_minute > 0:
        middleware.append(
            Middleware(RateLimitMiddleware, requests_per_minute=rate_limit_per_minute)
        )

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/api/lines", lines, methods=["GET"]),
            Route("/api/stations", stations, methods=["GET"]),
            Route("/api/journey", journey, methods=["GET"]),
            Route("/api/departures", stop_departures, methods=["GET"]),
            Route("/api/alerts", alerts, methods=["GET"]),
            Route("/api/trip/{trip_number}", trip, methods=["GET"]),
        ],
        middleware=middleware,
        exception_handlers={MissingCredentialError: _missing_credential_handler},
    )
