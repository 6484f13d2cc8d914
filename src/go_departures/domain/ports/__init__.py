"""Ports (interfaces) for the ports-and-adapters architecture."""

from go_departures.domain.ports.transit_repository import TransitRepository

__all__ = ["TransitRepository"]
