"""Configuration adapters."""

from go_departures.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
