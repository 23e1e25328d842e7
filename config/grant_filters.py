"""
Grant filter configuration for the Grantify filter engine.
Contains the fixed bounds, page sizes, sort keys, statuses and currencies
shared by the presets, the validator and the query mapper.
"""

from typing import Dict, List, Optional, Tuple

# Funding "practical infinity" shown in the UI ($100,000,000)
MAX_FUNDING: int = 100_000_000

# Largest integer the backend's numeric type holds exactly (2^53 - 1)
MAX_SAFE_INTEGER: int = 9_007_199_254_740_991

# Sent instead of MAX_FUNDING so "$100M+" never excludes extreme grants
MAX_SAFE_FUNDING: int = MAX_SAFE_INTEGER

# Deadline offsets in days relative to "now"
MIN_DEADLINE_DAYS: int = -90  # overdue grants up to 90 days back
MAX_DEADLINE_DAYS: int = 365  # 1 year

# Pagination
SEARCH_GRANTS_PER_PAGE: int = 6
DASHBOARD_GRANTS_PER_PAGE: int = 10
DEFAULT_PAGE_SIZE: int = 20
DEFAULT_PAGE: int = 1
MAX_SEARCH_RESULTS: int = 1000

# Reserved token the backend interprets as an impossible condition
NONE_SENTINEL: str = "NONE"

DEFAULT_SORT: str = "relevance"

# UI sort key -> (backend column, direction)
SORT_MAPPING: Dict[str, Tuple[str, str]] = {
    "relevance": ("created_at", "desc"),
    "recent": ("created_at", "desc"),
    "deadline": ("application_deadline", "asc"),
    "deadline_latest": ("application_deadline", "desc"),
    "amount": ("funding_amount_max", "desc"),
    "amount_asc": ("funding_amount_max", "asc"),
    "title_asc": ("title", "asc"),
    "title_desc": ("title", "desc"),
    "available": ("created_at", "desc"),
    "popular": ("view_count", "desc"),
}

# Sort options for dropdowns - (display_name, sort_key)
SORT_OPTIONS: List[Tuple[str, str]] = [
    ("Most Relevant", "relevance"),
    ("Recently Added", "recent"),
    ("Deadline (Soonest)", "deadline"),
    ("Deadline (Latest)", "deadline_latest"),
    ("Funding (Highest)", "amount"),
    ("Funding (Lowest)", "amount_asc"),
    ("Title (A-Z)", "title_asc"),
    ("Title (Z-A)", "title_desc"),
    ("Available Grants", "available"),
    ("Most Popular", "popular"),
]

# Grant statuses owned by the backend schema - (display_name, status_value)
GRANT_STATUSES: List[Tuple[str, str]] = [
    ("Active", "active"),
    ("Forecasted", "forecasted"),
    ("Open", "open"),
    ("Closed", "closed"),
    ("Archived", "archived"),
]

# Currency options for funding filtering
CURRENCIES: Dict[str, Tuple[str, str]] = {
    "USD": ("US Dollar", "USD"),
    "EUR": ("Euro", "EUR"),
    "GBP": ("British Pound", "GBP"),
    "CAD": ("Canadian Dollar", "CAD"),
}


def get_sort_options() -> List[str]:
    """Get list of sort keys for dropdown."""
    return [key for _, key in SORT_OPTIONS]


def get_sort_config(sort_key: str) -> Optional[Tuple[str, str]]:
    """Get (column, direction) for a sort key, or None if the key is unknown."""
    return SORT_MAPPING.get(sort_key)


def get_status_options() -> List[str]:
    """Get list of valid grant status values."""
    return [value for _, value in GRANT_STATUSES]


def get_currency_options() -> List[str]:
    """Get list of currency codes for dropdown."""
    return list(CURRENCIES.keys())


def get_currency_name(currency_code: str) -> str:
    """Get currency display name from code."""
    if currency_code in CURRENCIES:
        return CURRENCIES[currency_code][0]
    return currency_code
