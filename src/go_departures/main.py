"""Main entry point for the GO departures API server."""

import asyncio
import logging

import aiohttp
import uvicorn

from go_departures.adapters.config import AppConfig
from go_departures.adapters.web import create_app
from go_departures.wiring import build_service, configure_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config.log_level)

    if not config.has_api_key:
        # Start anyway so the API can report the configuration error to clients
        logger.error("METROLINX_API_KEY not configured; upstream endpoints will fail")

    async with aiohttp.ClientSession() as session:
        service = build_service(config, session)
        app = create_app(
            service,
            rate_limit_per_minute=config.rate_limit_per_minute,
            stop_departures_limit=config.stop_departures_limit,
        )

        server = uvicorn.Server(
            uvicorn.Config(app, host=config.host, port=config.port, log_level="info")
        )
        logger.info(f"Serving GO departures API on {config.host}:{config.port}")
        try:
            await server.serve()
        except KeyboardInterrupt:
            logger.info("Shutting down...")


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
