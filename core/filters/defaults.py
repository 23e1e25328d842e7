"""
Default filter state - the single reset target for every filter session.
"""

from config.grant_filters import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, DEFAULT_SORT

from .models import GrantFilter

# No funding or deadline bounds means "any amount" and "any deadline".
# Membership fields stay None ("all values") except statuses, which shows
# active and forecasted grants, the ones a user can still apply to.
DEFAULT_FILTER_STATE = GrantFilter(
    search_term="",
    funding_min=None,
    funding_max=None,
    include_funding_null=True,
    only_no_funding=False,
    deadline_min_days=None,
    deadline_max_days=None,
    include_no_deadline=True,
    only_no_deadline=False,
    show_overdue=True,
    statuses=["active", "forecasted"],
    currencies=None,
    organizations=None,
    grant_types=None,
    eligible_applicant_types=None,
    data_source_ids=None,
    include_no_currency=True,
    geographic_scope=None,
    include_no_geographic_scope=True,
    sort_by=DEFAULT_SORT,
    page=DEFAULT_PAGE,
    limit=DEFAULT_PAGE_SIZE,
)


def get_default_filter() -> GrantFilter:
    """Get a fresh copy of the default filter state."""
    return DEFAULT_FILTER_STATE.copy()
