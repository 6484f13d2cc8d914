"""Adapters layer - external system integrations."""

from go_departures.adapters.config import AppConfig
from go_departures.adapters.metrolinx_api import MetrolinxTransitRepository

__all__ = [
    "AppConfig",
    "MetrolinxTransitRepository",
]
