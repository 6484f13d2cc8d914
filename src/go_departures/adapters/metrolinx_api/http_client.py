"""HTTP client for Metrolinx OpenData API requests."""

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import aiohttp

from go_departures.adapters.api_request_logger import log_api_request
from go_departures.adapters.metrolinx_api.constants import (
    API_KEY_PARAM,
    DEFAULT_HEADERS,
    METROLINX_BASE_URL,
)
from go_departures.domain.errors import (
    MissingCredentialError,
    UpstreamDecodeError,
    UpstreamHttpError,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_TIMEOUT_SECONDS = 10.0


def build_request_url(base_url: str, endpoint: str, api_key: str) -> str:
    """Join base URL and endpoint and append the API key.

    The endpoint may already carry a query string, in which case the key is
    appended with ``&`` instead of ``?``.
    """
    separator = "&" if "?" in endpoint else "?"
    return f"{base_url}{endpoint}{separator}{API_KEY_PARAM}={quote(api_key, safe='')}"


class MetrolinxHttpClient:
    """Fetches and JSON-decodes Metrolinx OpenData responses. Never retries."""

    def __init__(
        self,
        session: "ClientSession",
        api_key: str | None,
        base_url: str = METROLINX_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            api_key: OpenData API key; None or empty means unconfigured.
            base_url: API base URL without a trailing slash.
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self._api_key = api_key or None
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return self._api_key is not None

    @staticmethod
    def _log_error_response(status: int, body: str, endpoint: str) -> None:
        error_body = body[:500] if body else "(empty response body)"
        logger.error(f"Metrolinx API returned status {status} for {endpoint}: {error_body}")

    async def fetch(self, endpoint: str) -> Any:
        """GET an endpoint and return the decoded JSON body.

        Args:
            endpoint: Path relative to the base URL, optionally with a query string.

        Returns:
            The decoded JSON value.

        Raises:
            MissingCredentialError: If no API key is configured. No request is made.
            UpstreamHttpError: On a non-2xx status, connection failure or timeout.
            UpstreamDecodeError: If the body is not UTF-8 encoded JSON.
        """
        if self._api_key is None:
            raise MissingCredentialError()

        url = build_request_url(self._base_url, endpoint, self._api_key)

        try:
            async with self._session.get(
                url, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                log_api_request("GET", url, response.status)
                raw = await response.read()
                if not 200 <= response.status < 300:
                    self._log_error_response(
                        response.status, raw.decode("utf-8", errors="replace"), endpoint
                    )
                    raise UpstreamHttpError(
                        f"Metrolinx API error: {response.status}",
                        status_code=response.status,
                        endpoint=endpoint,
                    )
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.warning(f"Error requesting Metrolinx endpoint {endpoint}: {e!r}")
            raise UpstreamHttpError(
                f"Metrolinx API request failed: {e!r}", endpoint=endpoint
            ) from e

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Invalid JSON from Metrolinx endpoint {endpoint}: {raw[:200]!r}")
            raise UpstreamDecodeError(
                "Invalid JSON response from Metrolinx API", endpoint=endpoint
            ) from e
