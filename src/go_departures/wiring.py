"""Process setup shared by the API server and the CLI."""

import logging
import sys

import aiohttp

from go_departures.adapters.config import AppConfig
from go_departures.adapters.metrolinx_api import MetrolinxTransitRepository
from go_departures.application.services import JourneyService


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_service(config: AppConfig, session: aiohttp.ClientSession) -> JourneyService:
    """Wire the Metrolinx repository into a journey service."""
    repository = MetrolinxTransitRepository(
        session=session,
        api_key=config.metrolinx_api_key,
        base_url=config.metrolinx_base_url,
        timeout_seconds=config.api_timeout_seconds,
    )
    return JourneyService(
        repository,
        timezone=config.timezone,
        journey_max_results=config.journey_max_results,
    )
