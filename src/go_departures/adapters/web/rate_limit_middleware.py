"""Per-client rate limiting middleware for the JSON API using throttled-py."""

import logging
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0


def extract_client_ip(request: Request) -> str:
    """Identify the client, preferring the first hop of X-Forwarded-For."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients exceeding ``requests_per_minute`` with 429 and Retry-After.

    Consumers poll journeys about once a minute, so the default quota leaves
    ample headroom for normal use.
    """

    def __init__(self, app: Callable, requests_per_minute: int = 120) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self._quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        self._store = store.MemoryStore()
        logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")

    def _throttle_for(self, client_ip: str) -> Throttled:
        return Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self._quota,
            store=self._store,
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Check the client's quota before handing the request on."""
        client_ip = extract_client_ip(request)
        result = self._throttle_for(client_ip).limit()
        if result.limited:
            state = getattr(result, "state", None)
            retry_after = float(getattr(state, "retry_after", DEFAULT_RETRY_AFTER_SECONDS))
            logger.warning(f"Rate limit exceeded for {client_ip}, retry after {retry_after:.0f}s")
            return JSONResponse(
                {"error": "Rate limit exceeded. Please try again later."},
                status_code=429,
                headers={"Retry-After": str(max(1, int(retry_after)))},
            )

        response: Response = await call_next(request)
        return response
