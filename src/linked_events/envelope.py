"""Response envelope models and decoding.

LinkedEvents-style APIs answer in one of two shapes:

    - Collection (search/listing): ``{"meta": {"next": "...", ...}, "data": [...]}``
    - Single resource (fetch by ID) or anything else: a bare JSON value

decode_contents() decides the shape once, when the body is parsed, and
returns either a CollectionEnvelope or a SingleEnvelope. Callers never have
to inspect the raw payload again.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from .exceptions import DecodeError, LinkedEventsError

__all__ = [
    "CollectionEnvelope",
    "Envelope",
    "PaginatedResult",
    "SingleEnvelope",
    "decode_contents",
]


@dataclass(frozen=True)
class CollectionEnvelope:
    """A paged collection payload, kept verbatim.

    Attributes:
        data: Page contents, normally a list of resource objects
        meta: Pagination metadata (``count``, ``next``, ``previous``, ...)
    """

    data: Any
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def next(self) -> str | None:
        """URL of the following page, or None on the last page."""
        next_url = self.meta.get("next") if isinstance(self.meta, dict) else None
        if isinstance(next_url, str) and next_url.strip():
            return next_url
        return None

    @property
    def items(self) -> list[Any]:
        """Page contents as a list, ready to be concatenated."""
        return _as_items(self.data)


@dataclass(frozen=True)
class SingleEnvelope:
    """A bare payload wrapped as ``data`` with empty ``meta``.

    Error payloads such as ``{"detail": "not found"}`` also land here; the
    HTTP status check runs before decoding and is the only error detection.
    """

    data: Any

    @property
    def meta(self) -> dict[str, Any]:
        return {}

    @property
    def next(self) -> None:
        return None

    @property
    def items(self) -> list[Any]:
        return _as_items(self.data)


Envelope = CollectionEnvelope | SingleEnvelope


@dataclass
class PaginatedResult:
    """Outcome of walking every page of a listing.

    Attributes:
        items: Concatenated page contents in traversal order
        pages: Number of pages successfully fetched and aggregated
        error: Error that stopped pagination early, None when complete
    """

    items: list[Any] = field(default_factory=list)
    pages: int = 0
    error: LinkedEventsError | None = None

    @property
    def complete(self) -> bool:
        """True when every page was fetched."""
        return self.error is None


def _as_items(data: Any) -> list[Any]:
    if data is None:
        return []
    if isinstance(data, list):
        return list(data)
    return [data]


def decode_contents(body: str) -> Envelope:
    """Decode an API response body into an envelope.

    A JSON object with both ``meta`` and ``data`` set (non-null) becomes a
    CollectionEnvelope unchanged. Any other JSON value becomes a
    SingleEnvelope whose ``data`` is the whole parsed value.

    Args:
        body: Raw response body

    Returns:
        CollectionEnvelope or SingleEnvelope

    Raises:
        DecodeError: If the body is empty or not valid JSON
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError, RecursionError) as e:
        raise DecodeError(f"Invalid JSON in response body: {e}", body=body) from e

    if (
        isinstance(payload, dict)
        and payload.get("meta") is not None
        and payload.get("data") is not None
    ):
        return CollectionEnvelope(data=payload["data"], meta=payload["meta"])

    return SingleEnvelope(data=payload)
