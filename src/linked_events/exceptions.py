"""Error taxonomy for the LinkedEvents client.

All errors raised by the client derive from LinkedEventsError so callers can
catch the whole family in one place:

    - ConfigurationError: invalid or empty base URL at construction
    - HttpStatusError: response status outside [200, 300)
    - DecodeError: response body is not valid JSON
    - TransportError: the request never produced a response
"""

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "HttpStatusError",
    "LinkedEventsError",
    "TransportError",
]


class LinkedEventsError(Exception):
    """Base class for every error raised by the client."""

    #: Numeric code written to failure log records (HTTP status where known).
    code: int = 0


class ConfigurationError(LinkedEventsError):
    """Raised when the client is constructed with an empty or invalid base URL."""

    pass


class HttpStatusError(LinkedEventsError):
    """Raised when the API responds with a status code outside [200, 300).

    Attributes:
        url: Requested URL
        body: Raw response body (may be empty)
        status_code: HTTP status code returned by the server
    """

    def __init__(self, url: str, body: str, status_code: int) -> None:
        self.url = url
        self.body = body
        self.status_code = status_code
        self.code = status_code
        super().__init__(f"{url}: {body}")


class DecodeError(LinkedEventsError):
    """Raised when a response body cannot be parsed as JSON."""

    def __init__(self, message: str, body: str | None = None) -> None:
        self.body = body
        super().__init__(message)


class TransportError(LinkedEventsError):
    """Raised when the HTTP request fails before a response is received.

    Wraps httpx transport errors (connect failures, timeouts) for consistent
    error handling. The original httpx exception is chained as __cause__.
    """

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{url}: {message}")
