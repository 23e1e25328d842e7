"""
Utilities module for Grantify.
Contains time and query string helpers.
"""

from .query_string import build_grants_url, encode_query_params
from .time_utils import resolve_deadline_offset, to_iso_timestamp, utc_now

__all__ = [
    'build_grants_url',
    'encode_query_params',
    'resolve_deadline_offset',
    'to_iso_timestamp',
    'utc_now',
]
