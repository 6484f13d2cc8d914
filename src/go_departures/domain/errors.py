"""Error taxonomy shared by the domain, application and adapter layers."""


class TransitError(Exception):
    """Base class for all errors raised by the transit data layer."""


class MissingCredentialError(TransitError):
    """Raised when the upstream API key is not configured.

    This is a configuration error, not a transient fault. It is raised before any
    upstream request is attempted.
    """

    def __init__(self, message: str = "Metrolinx API key not configured") -> None:
        super().__init__(message)


class UpstreamError(TransitError):
    """Base class for failures talking to the upstream open-data API."""

    def __init__(self, message: str, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class UpstreamHttpError(UpstreamError):
    """Upstream responded with a non-success status, or the transport failed.

    ``status_code`` is ``None`` for transport-level failures (connection errors,
    timeouts) where no HTTP response was received.
    """

    def __init__(
        self, message: str, status_code: int | None = None, endpoint: str | None = None
    ) -> None:
        super().__init__(message, endpoint=endpoint)
        self.status_code = status_code


class UpstreamDecodeError(UpstreamError):
    """Upstream body could not be decoded as JSON (even with a 200 status)."""
