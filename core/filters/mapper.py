"""
Filter-to-query mapping.

map_filters_to_api is the single translation from the UI-facing GrantFilter
to the flat parameter record the grants REST API reads from its query
string. It is total: every GrantFilter maps to some record, and it never
raises on filter content. Contradictory input is the validator's problem.

Key rules:
- Pagination is always sent, so the backend never receives an unpaginated
  request.
- Set-membership fields: None -> omitted, [] -> ["NONE"] (matches zero rows),
  otherwise the values in input order.
- Funding / deadline: the "only null" override sends only the null check;
  null-inclusion flags are sent only alongside an actual bound.
- Deadline day offsets are resolved against "now" on every call.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from config.data_sources import map_data_sources_to_uuids
from config.grant_filters import DEFAULT_PAGE, MAX_FUNDING, MAX_SAFE_FUNDING, NONE_SENTINEL, SORT_MAPPING
from settings.infrastructure_config import FilterConfig, get_filter_config
from utils.time_utils import resolve_deadline_offset, to_iso_timestamp, utc_now

from .models import (
    DeadlineRange,
    FundingRange,
    GrantFilter,
    MatchAny,
    MatchNone,
    OnlyNoDeadline,
    OnlyNoFunding,
    deadline_dimension,
    funding_dimension,
    membership_dimension,
)

logger = logging.getLogger(__name__)

QueryParams = Dict[str, Any]

# GrantFilter field -> API parameter for "[] means match none" fields
MEMBERSHIP_PARAMS: Dict[str, str] = {
    "statuses": "status",
    "currencies": "currency",
    "organizations": "funding_organization_name",
    "grant_types": "grant_type",
    "eligible_applicant_types": "eligible_applicant_types",
}


def map_filters_to_api(
    grant_filter: GrantFilter, now: Optional[datetime] = None, config: Optional[FilterConfig] = None
) -> QueryParams:
    """
    Map a grant filter to backend query parameters.

    Args:
        grant_filter: Filter to translate (expected to be validated)
        now: Instant deadline offsets are resolved against (read from the
             clock when omitted, so two calls may differ)
        config: Filter config providing the default page size

    Returns:
        QueryParams: Flat parameter record for the grants endpoint
    """
    config = config or get_filter_config()
    if now is None:
        now = utc_now()

    params: QueryParams = {}

    if grant_filter.search_term:
        params["search"] = grant_filter.search_term

    # Pagination is always sent and never below 1
    params["limit"] = max(1, grant_filter.limit or config.default_page_size)
    params["page"] = max(1, grant_filter.page or DEFAULT_PAGE)

    _map_data_sources(grant_filter, params)
    _map_sort(grant_filter, params)
    _map_deadline(grant_filter, params, now)
    _map_funding(grant_filter, params)

    if grant_filter.show_overdue is not None:
        params["show_overdue"] = grant_filter.show_overdue

    for field_name, param_name in MEMBERSHIP_PARAMS.items():
        _map_membership(getattr(grant_filter, field_name), param_name, params)

    _map_optional_fields(grant_filter, params)

    logger.debug(f"Mapped filter to {len(params)} query parameters: {sorted(params)}")
    return params


def _map_membership(values: Optional[List[str]], param_name: str, params: QueryParams) -> None:
    dimension = membership_dimension(values)
    if isinstance(dimension, MatchNone):
        params[param_name] = [NONE_SENTINEL]
    elif isinstance(dimension, MatchAny):
        params[param_name] = list(dimension.values)


def _map_data_sources(grant_filter: GrantFilter, params: QueryParams) -> None:
    # data_source_ids wins; the legacy "sources" field is read only when it is unset
    sources = grant_filter.data_source_ids
    if sources is None:
        sources = grant_filter.sources

    dimension = membership_dimension(sources)
    if isinstance(dimension, MatchNone):
        params["data_sources"] = [NONE_SENTINEL]
    elif isinstance(dimension, MatchAny):
        params["data_sources"] = map_data_sources_to_uuids(list(dimension.values))


def _map_sort(grant_filter: GrantFilter, params: QueryParams) -> None:
    if not grant_filter.sort_by:
        return

    sort_config = SORT_MAPPING.get(grant_filter.sort_by)
    if sort_config:
        params["sort_by"], params["sort_direction"] = sort_config
    else:
        logger.debug(f"Unknown sort key '{grant_filter.sort_by}', passing through as column name")
        params["sort_by"] = grant_filter.sort_by


def _map_deadline(grant_filter: GrantFilter, params: QueryParams, now: datetime) -> None:
    dimension = deadline_dimension(grant_filter)

    if isinstance(dimension, OnlyNoDeadline):
        params["deadline_null"] = True
        return

    if not isinstance(dimension, DeadlineRange):
        return

    if dimension.min_days is not None:
        params["deadline_start"] = to_iso_timestamp(resolve_deadline_offset(dimension.min_days, now))
    if dimension.max_days is not None:
        params["deadline_end"] = to_iso_timestamp(resolve_deadline_offset(dimension.max_days, now))

    # deadline_dimension only yields a range when at least one bound is sent
    if dimension.include_null is not None:
        params["include_no_deadline"] = dimension.include_null


def _map_funding(grant_filter: GrantFilter, params: QueryParams) -> None:
    dimension = funding_dimension(grant_filter)

    if isinstance(dimension, OnlyNoFunding):
        params["funding_null"] = True
        return

    if not isinstance(dimension, FundingRange):
        return

    bound_sent = False

    if dimension.minimum is not None:
        params["funding_min"] = dimension.minimum
        bound_sent = True

    if dimension.maximum is not None:
        # "$100M+" must not cut off grants above the UI ceiling
        params["funding_max"] = MAX_SAFE_FUNDING if dimension.maximum >= MAX_FUNDING else dimension.maximum
        bound_sent = True

    if bound_sent and dimension.include_null is not None:
        params["include_no_funding"] = dimension.include_null


def _map_optional_fields(grant_filter: GrantFilter, params: QueryParams) -> None:
    if grant_filter.include_no_currency is not None:
        params["include_no_currency"] = grant_filter.include_no_currency

    if grant_filter.only_featured:
        params["is_featured"] = True

    if grant_filter.post_date_from:
        params["posted_date_start"] = grant_filter.post_date_from
    if grant_filter.post_date_to:
        params["posted_date_end"] = grant_filter.post_date_to

    if grant_filter.geographic_scope:
        params["geographic_scope"] = grant_filter.geographic_scope
    if grant_filter.include_no_geographic_scope is not None:
        params["include_no_geographic_scope"] = grant_filter.include_no_geographic_scope

    # No "match none" semantics for these: empty behaves like unset
    if grant_filter.countries:
        params["countries"] = list(grant_filter.countries)
    if grant_filter.states:
        params["states"] = list(grant_filter.states)
    if grant_filter.cfda_numbers:
        params["cfda_numbers"] = list(grant_filter.cfda_numbers)

    if grant_filter.opportunity_number:
        params["opportunity_number"] = grant_filter.opportunity_number

    if grant_filter.min_view_count is not None:
        params["min_view_count"] = grant_filter.min_view_count
    if grant_filter.min_save_count is not None:
        params["min_save_count"] = grant_filter.min_save_count
