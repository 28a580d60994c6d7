"""LinkedEvents REST API client.

Provides a synchronous httpx-based client for LinkedEvents-style APIs.
Normalizes the response envelope (single resource vs. paged collection) and
follows ``meta.next`` cursor links to collect every page of a listing.

Failure policy while paginating:
    - First page: errors propagate to the caller.
    - Follow-on pages: errors are logged, pagination stops, and the items
      collected so far are returned.

Reference: https://dev.hel.fi/apis/linkedevents
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

import httpx

from .config import ClientConfig, get_config
from .envelope import Envelope, PaginatedResult, decode_contents
from .exceptions import (
    ConfigurationError,
    DecodeError,
    HttpStatusError,
    LinkedEventsError,
    TransportError,
)
from .logging_config import log_exception
from .query import to_query_parameters

logger = logging.getLogger("linked_events.client")

__all__ = ["LinkedEventsClient"]

# Stripped from the end of the base URL; the client adds its own separator
_TRAILING_CHARS = "/ \t\n\r\0\x0b"


def _is_valid_url(url: str | None) -> bool:
    """Check that url is an absolute URL with a scheme and a host."""
    if not url or any(c.isspace() for c in url):
        return False
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError):
        return False
    return bool(parsed.scheme) and bool(parsed.host)


class LinkedEventsClient:
    """LinkedEvents REST API client using httpx.

    Holds a validated base URL and a pooled httpx.Client. Every call is
    independent; page results accumulate in call-local lists, so one client
    can be shared between threads.

    Attributes:
        base_url: API base URL with trailing slashes removed
        client: Underlying httpx.Client

    Example:
        >>> with LinkedEventsClient("https://api.hel.fi/linkedevents/v1/") as client:
        ...     event = client.get("event/helsinki:agf3zqv2ka")
        ...     events = client.get_all("event", {"start": "2021-01-17"})
    """

    # Timeout configuration used when none is given
    CONNECT_TIMEOUT = 5.0  # seconds
    READ_TIMEOUT = 30.0  # seconds
    WRITE_TIMEOUT = 5.0  # seconds
    POOL_TIMEOUT = 5.0  # seconds

    decode_contents = staticmethod(decode_contents)
    to_query_parameters = staticmethod(to_query_parameters)

    def __init__(
        self,
        base_url: str,
        timeout: float | httpx.Timeout | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL. Trailing slashes and whitespace are removed.
            timeout: Request timeout in seconds or an httpx.Timeout.
                Defaults to the class timeout constants.
            http_client: Optional preconfigured httpx.Client. The caller keeps
                ownership and must close it.

        Raises:
            ConfigurationError: If base_url is empty or not a valid absolute URL
        """
        base_url = (base_url or "").strip().rstrip(_TRAILING_CHARS)
        if not _is_valid_url(base_url):
            raise ConfigurationError("You need to provide a valid API base url")

        self.base_url = base_url

        if http_client is not None:
            self.client = http_client
            self._owns_client = False
        else:
            if timeout is None:
                timeout = httpx.Timeout(
                    connect=self.CONNECT_TIMEOUT,
                    read=self.READ_TIMEOUT,
                    write=self.WRITE_TIMEOUT,
                    pool=self.POOL_TIMEOUT,
                )
            self.client = httpx.Client(timeout=timeout, follow_redirects=True)
            self._owns_client = True

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> "LinkedEventsClient":
        """Build a client from ClientConfig (environment + .env by default).

        Raises:
            ConfigurationError: If the configured base_url is empty or invalid
        """
        config = config or get_config()
        return cls(config.base_url, timeout=config.get_timeout())

    def close(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "LinkedEventsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # --- URL building & raw requests ---

    def build_request_url(
        self, endpoint: str, parameters: Mapping[str, Any] | None = None
    ) -> str:
        """Build the absolute URL for an endpoint.

        Format: ``{base_url}/{endpoint}/?{query}``; the ``?`` is dropped when
        there are no parameters.
        """
        query = to_query_parameters(parameters)
        return f"{self.base_url}/{endpoint}/?{query}".rstrip("?").strip()

    def fetch_raw(self, api_url: str) -> str | None:
        """Fetch a response body by absolute URL.

        Args:
            api_url: Absolute URL to GET

        Returns:
            Response body (possibly empty), or None when api_url is empty or
            not a valid absolute URL.

        Raises:
            HttpStatusError: If the API responded with anything other than 2XX
            TransportError: If the request failed before a response arrived
        """
        if not _is_valid_url(api_url):
            logger.debug("linked_events_invalid_url", extra={"url": api_url})
            return None

        try:
            response = self.client.get(api_url)
        except httpx.TimeoutException as e:
            logger.error("linked_events_request_timeout", extra={"url": api_url, "error": str(e)})
            raise TransportError(api_url, f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error("linked_events_request_error", extra={"url": api_url, "error": str(e)})
            raise TransportError(api_url, f"Request failed: {e}") from e

        status_code = response.status_code
        body = response.text or ""

        if status_code < 200 or status_code >= 300:
            logger.warning(
                "linked_events_http_status_error",
                extra={"url": api_url, "status_code": status_code},
            )
            raise HttpStatusError(api_url, body, status_code)

        return body

    # --- Single page ---

    def get_first_page(
        self, endpoint: str, parameters: Mapping[str, Any] | None = None
    ) -> Envelope | None:
        """Get the first page of an endpoint as an envelope.

        Use this to build custom page fetching: the envelope exposes ``data``,
        ``meta`` and ``next``. Performs exactly one HTTP request.

        Args:
            endpoint: Endpoint path, e.g. 'event' or 'event/system:abc'
            parameters: Optional query parameters

        Returns:
            Decoded envelope, or None if the response body was empty

        Raises:
            HttpStatusError: If the API responded with anything other than 2XX
            DecodeError: If the response body is not valid JSON
            TransportError: If the request failed before a response arrived
        """
        request_url = self.build_request_url(endpoint, parameters)
        body = self.fetch_raw(request_url)

        if not body:
            return None
        return decode_contents(body)

    def get(self, endpoint: str, parameters: Mapping[str, Any] | None = None) -> Any:
        """Get the ``data`` of the first page of an endpoint.

        Limited to the first page of results; use get_all() for every page.

        Args:
            endpoint: Endpoint path, e.g. 'event' or 'event/system:abc'
            parameters: Optional query parameters

        Returns:
            Decoded data, or None if the response body was empty

        Raises:
            HttpStatusError: If the API responded with anything other than 2XX
            DecodeError: If the response body is not valid JSON
            TransportError: If the request failed before a response arrived
        """
        envelope = self.get_first_page(endpoint, parameters)
        if envelope is None:
            return None
        return envelope.data

    # --- Pagination ---

    def _fetch_page(self, page_url: str) -> Envelope:
        body = self.fetch_raw(page_url)
        if body is None:
            raise DecodeError(f"Invalid pagination URL: {page_url!r}")
        return decode_contents(body)

    def _walk_pages(
        self,
        endpoint: str,
        parameters: Mapping[str, Any] | None,
        result: PaginatedResult,
    ) -> Iterator[Envelope]:
        """Yield page envelopes, following ``meta.next`` links.

        First page errors propagate. A failing follow-on page is logged,
        stored on result.error and ends the walk. result.pages counts the
        pages yielded so far.
        """
        envelope = self.get_first_page(endpoint, parameters)
        if envelope is None:
            return

        result.pages = 1
        yield envelope
        next_url = envelope.next

        while next_url:
            try:
                envelope = self._fetch_page(next_url)
            except LinkedEventsError as e:
                log_exception(
                    logger,
                    "linked_events_pagination_failed",
                    e,
                    endpoint=endpoint,
                    url=next_url,
                    pages=result.pages,
                )
                result.error = e
                return

            result.pages += 1
            logger.debug(
                "linked_events_page",
                extra={"endpoint": endpoint, "page": result.pages},
            )
            yield envelope
            next_url = envelope.next

    def get_all_pages(
        self, endpoint: str, parameters: Mapping[str, Any] | None = None
    ) -> PaginatedResult:
        """Walk every page of a listing and report whether it completed.

        Args:
            endpoint: Endpoint path, e.g. 'event'
            parameters: Optional query parameters

        Returns:
            PaginatedResult with the concatenated items, the number of pages
            aggregated and the error that stopped pagination (None if complete)

        Raises:
            HttpStatusError, DecodeError, TransportError: Only for the first page
        """
        result = PaginatedResult()

        for envelope in self._walk_pages(endpoint, parameters, result):
            result.items.extend(envelope.items)

        logger.info(
            "linked_events_get_all_complete",
            extra={
                "endpoint": endpoint,
                "pages": result.pages,
                "total_items": len(result.items),
                "complete": result.complete,
            },
        )
        return result

    def get_all(
        self, endpoint: str, parameters: Mapping[str, Any] | None = None
    ) -> list[Any]:
        """Get all paged results from the API.

        Follows ``meta.next`` until the last page. If a page after the first
        fails, the failure is logged and the items gathered so far are
        returned; use get_all_pages() to detect that case.

        Args:
            endpoint: Endpoint path, e.g. 'event'
            parameters: Optional query parameters

        Returns:
            Items of every fetched page, in page order

        Raises:
            HttpStatusError, DecodeError, TransportError: Only for the first page
        """
        return self.get_all_pages(endpoint, parameters).items

    def iter_pages(
        self, endpoint: str, parameters: Mapping[str, Any] | None = None
    ) -> Iterator[Envelope]:
        """Lazily yield each page envelope in traversal order.

        Pages are fetched one at a time as the iterator advances. The first
        page raises on failure; a failing follow-on page is logged and ends
        the iteration.
        """
        yield from self._walk_pages(endpoint, parameters, PaginatedResult())
