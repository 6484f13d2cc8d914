"""Web adapter - JSON API over the journey service."""

from go_departures.adapters.web.api_app import create_app

__all__ = ["create_app"]
