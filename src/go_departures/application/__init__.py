"""Application layer - the journey aggregation engine and its use cases."""

from go_departures.application.services import JourneyService

__all__ = ["JourneyService"]
