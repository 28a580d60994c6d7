"""Query string encoding for API requests."""

from collections.abc import Mapping
from typing import Any

__all__ = ["to_query_parameters"]


def to_query_parameters(parameters: Mapping[str, Any] | None = None) -> str:
    """Build a query string from a parameter mapping.

    List and tuple values are comma-joined, so ``{"tags": ["a", "b"]}``
    becomes ``tags=a,b``. Key order follows the mapping.

    Keys and values are NOT percent-encoded. Values containing reserved
    characters (``&``, ``=``, ``#``, spaces) must be encoded by the caller.

    Args:
        parameters: Mapping of parameter name to a scalar or a sequence

    Returns:
        Query string without the leading ``?``; empty string for no parameters

    Example:
        >>> to_query_parameters({"start": "2021-01-17", "tags": ["a", "b"]})
        'start=2021-01-17&tags=a,b'
    """
    if not parameters:
        return ""

    pairs = []
    for key, value in parameters.items():
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        pairs.append(f"{key}={value}")

    return "&".join(pairs)
