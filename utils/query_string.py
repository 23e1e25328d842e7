"""
Query string helpers for the grants REST API.

The backend reads every filter parameter from the query string, so list
values travel comma-joined and booleans as lowercase literals.
"""

from typing import Any, Dict, List, Tuple
from urllib.parse import urlencode


def format_query_value(value: Any) -> str:
    """Format a single parameter value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(format_query_value(item) for item in value)
    return str(value)


def encode_query_params(params: Dict[str, Any]) -> str:
    """
    Encode a query-parameter record into a URL query string.

    None values are skipped. Parameter order follows the record.

    Examples:
        >>> encode_query_params({"status": ["active", "open"], "page": 1, "search": None})
        'status=active%2Copen&page=1'
    """
    pairs: List[Tuple[str, str]] = [
        (key, format_query_value(value)) for key, value in params.items() if value is not None
    ]
    return urlencode(pairs)


def build_grants_url(base_url: str, params: Dict[str, Any]) -> str:
    """Append encoded parameters to a grants endpoint URL."""
    query = encode_query_params(params)
    if not query:
        return base_url
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{query}"
