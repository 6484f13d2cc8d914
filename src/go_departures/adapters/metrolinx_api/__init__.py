"""Metrolinx OpenData API adapters for GO Transit."""

from go_departures.adapters.metrolinx_api.http_client import MetrolinxHttpClient
from go_departures.adapters.metrolinx_api.metrolinx_transit_repository import (
    MetrolinxTransitRepository,
)

__all__ = ["MetrolinxHttpClient", "MetrolinxTransitRepository"]
