"""LinkedEvents API client.

Minimal synchronous client for LinkedEvents-style paginated REST APIs:
- Envelope decoding (single resource vs. paged collection)
- Cursor pagination over ``meta.next`` links
- Typed errors for HTTP status, decode and transport failures
- Configuration with environment overrides
"""

# Logging Configuration - configure before other imports
from .logging_config import StructuredFormatter, configure_logging, log_exception

configure_logging()

from .client import LinkedEventsClient
from .config import ClientConfig, get_config, reset_config
from .envelope import (
    CollectionEnvelope,
    Envelope,
    PaginatedResult,
    SingleEnvelope,
    decode_contents,
)
from .exceptions import (
    ConfigurationError,
    DecodeError,
    HttpStatusError,
    LinkedEventsError,
    TransportError,
)
from .query import to_query_parameters

__version__ = "1.0.0"

__all__ = [
    "ClientConfig",
    "CollectionEnvelope",
    "ConfigurationError",
    "DecodeError",
    "Envelope",
    "HttpStatusError",
    "LinkedEventsClient",
    "LinkedEventsError",
    "PaginatedResult",
    "SingleEnvelope",
    "StructuredFormatter",
    "TransportError",
    "configure_logging",
    "decode_contents",
    "get_config",
    "log_exception",
    "reset_config",
    "to_query_parameters",
]
