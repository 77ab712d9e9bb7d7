"""Exception hierarchy for the route and NOTAM pipeline."""
from typing import Optional


class RouteBriefError(Exception):
    """Base class for all routebrief errors."""


class ConfigurationError(RouteBriefError):
    """Raised when required configuration (e.g. API credentials) is missing."""


class NoticeQueryError(RouteBriefError, ValueError):
    """Raised when a NOTAM query parameter is out of range. No request is sent."""


class NoticeValidationError(RouteBriefError, ValueError):
    """Raised when a NoticeRecord cannot be built."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} must be non-blank")


class NoticeApiError(RouteBriefError):
    """
    Raised when the NOTAM API call fails.

    status_code is None when no HTTP response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class NoticeApiTimeoutError(NoticeApiError):
    """Raised when the NOTAM API does not answer within the timeout."""


class AirportNotFoundError(RouteBriefError, LookupError):
    """Raised when an ICAO code is not in the airport directory."""


class RouteComputationError(RouteBriefError):
    """Raised when interpolation produces non-finite coordinates."""
