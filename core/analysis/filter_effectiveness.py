"""
Filter effectiveness analysis.

Replays mapped query parameters against a local grants table (a CSV export
of the grants dataset) with the same matching rules the backend applies,
so filter and preset changes can be checked offline:

- ["NONE"] in a membership parameter matches zero rows
- Null-inclusion flags only matter alongside an actual bound
- show_overdue=False hides past deadlines unless a deadline start is sent

Expected columns: title, description, status, currency, data_source_id,
funding_organization_name, grant_type, funding_amount_min,
funding_amount_max, application_deadline, eligible_applicant_types (a list
or a comma-separated string). Missing columns are treated as
all-null.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from config.grant_filters import NONE_SENTINEL
from core.filters.defaults import get_default_filter
from core.filters.mapper import QueryParams, map_filters_to_api
from core.filters.models import GrantFilter
from core.filters.presets import (
    DEADLINE_RANGE_PRESETS,
    FUNDING_RANGE_PRESETS,
    apply_filter_preset,
    deadline_range_patch,
    funding_range_patch,
    get_filter_presets,
)
from core.filters.validator import validate_filter_state
from settings.infrastructure_config import FilterConfig, get_filter_config
from utils.time_utils import parse_iso_timestamp, utc_now

logger = logging.getLogger(__name__)

# API parameter -> grants table column for plain membership filters
MEMBERSHIP_COLUMNS: Dict[str, str] = {
    "status": "status",
    "currency": "currency",
    "funding_organization_name": "funding_organization_name",
    "grant_type": "grant_type",
    "data_sources": "data_source_id",
    "eligible_applicant_types": "eligible_applicant_types",
}

# Columns holding several values per grant; any overlap is a match
LIST_MEMBERSHIP_COLUMNS = {"eligible_applicant_types"}

# Bounds of pandas' nanosecond timestamps
EARLIEST_DEADLINE = datetime(1678, 1, 1, tzinfo=timezone.utc)
LATEST_DEADLINE = datetime(2262, 4, 11, tzinfo=timezone.utc)


def _column(grants_df: pd.DataFrame, name: str) -> pd.Series:
    if name in grants_df.columns:
        return grants_df[name]
    return pd.Series([None] * len(grants_df), index=grants_df.index, dtype="object")


def _deadlines(grants_df: pd.DataFrame) -> pd.Series:
    return pd.to_datetime(_column(grants_df, "application_deadline"), utc=True, errors="coerce")


def _funding_amounts(grants_df: pd.DataFrame) -> pd.Series:
    maximum = pd.to_numeric(_column(grants_df, "funding_amount_max"), errors="coerce")
    minimum = pd.to_numeric(_column(grants_df, "funding_amount_min"), errors="coerce")
    return maximum.fillna(minimum)


def _membership_mask(grants_df: pd.DataFrame, param: str, values: List[str], params: QueryParams) -> pd.Series:
    if values == [NONE_SENTINEL]:
        return pd.Series(False, index=grants_df.index)

    column = _column(grants_df, MEMBERSHIP_COLUMNS[param])
    if param in LIST_MEMBERSHIP_COLUMNS:
        wanted = set(values)
        return column.apply(lambda cell: bool(wanted.intersection(_cell_values(cell)))).astype(bool)

    mask = column.isin(values)
    if param == "currency" and params.get("include_no_currency"):
        mask |= column.isna()
    return mask


def _cell_values(cell: Any) -> List[str]:
    if isinstance(cell, (list, tuple, set)):
        return [str(value) for value in cell]
    if isinstance(cell, str):
        return [value.strip() for value in cell.split(",") if value.strip()]
    return []


def _deadline_bound(value: str) -> pd.Timestamp:
    parsed = parse_iso_timestamp(value)
    return pd.Timestamp(min(max(parsed, EARLIEST_DEADLINE), LATEST_DEADLINE))


def _search_mask(grants_df: pd.DataFrame, term: str) -> pd.Series:
    title = _column(grants_df, "title").fillna("").astype(str)
    description = _column(grants_df, "description").fillna("").astype(str)
    return title.str.contains(term, case=False, regex=False) | description.str.contains(
        term, case=False, regex=False
    )


def _funding_mask(grants_df: pd.DataFrame, params: QueryParams) -> pd.Series:
    amounts = _funding_amounts(grants_df)

    if params.get("funding_null"):
        return amounts.isna()

    has_min = "funding_min" in params
    has_max = "funding_max" in params
    if not (has_min or has_max):
        return pd.Series(True, index=grants_df.index)

    in_range = pd.Series(True, index=grants_df.index)
    if has_min:
        in_range &= amounts >= params["funding_min"]
    if has_max:
        in_range &= amounts <= params["funding_max"]

    if params.get("include_no_funding"):
        in_range |= amounts.isna()
    return in_range


def _deadline_mask(grants_df: pd.DataFrame, params: QueryParams, now: datetime) -> pd.Series:
    deadlines = _deadlines(grants_df)

    if params.get("deadline_null"):
        return deadlines.isna()

    mask = pd.Series(True, index=grants_df.index)
    has_start = "deadline_start" in params
    has_end = "deadline_end" in params

    if has_start or has_end:
        in_range = deadlines.notna()
        if has_start:
            in_range &= deadlines >= _deadline_bound(params["deadline_start"])
        if has_end:
            in_range &= deadlines <= _deadline_bound(params["deadline_end"])
        if params.get("include_no_deadline"):
            in_range |= deadlines.isna()
        mask &= in_range

    if params.get("show_overdue") is False and not has_start:
        mask &= deadlines.isna() | (deadlines >= pd.Timestamp(now))

    return mask


def apply_query_params(
    grants_df: pd.DataFrame, params: QueryParams, now: Optional[datetime] = None
) -> pd.DataFrame:
    """
    Filter a grants table the way the backend filters for these params.

    Pagination and sorting are ignored; the full match set is returned.

    Args:
        grants_df: Grants table
        params: Output of map_filters_to_api
        now: Reference instant for show_overdue (defaults to current UTC time)

    Returns:
        pd.DataFrame: Matching rows
    """
    if grants_df.empty:
        return grants_df.copy()

    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    mask = pd.Series(True, index=grants_df.index)

    if params.get("search"):
        mask &= _search_mask(grants_df, str(params["search"]))

    for param in MEMBERSHIP_COLUMNS:
        if param in params:
            mask &= _membership_mask(grants_df, param, list(params[param]), params)

    mask &= _funding_mask(grants_df, params)
    mask &= _deadline_mask(grants_df, params, now)

    return grants_df[mask].copy()


def count_matches(
    grants_df: pd.DataFrame, grant_filter: GrantFilter, now: datetime, config: FilterConfig
) -> int:
    """Validate, map and apply a filter; return the number of matching grants."""
    validated = validate_filter_state(grant_filter, config)
    params = map_filters_to_api(validated, now=now, config=config)
    return len(apply_query_params(grants_df, params, now))


def _result_row(name: str, label: str, matches: int, total: int) -> Dict[str, Any]:
    share = (matches / total * 100) if total > 0 else 0.0
    return {"name": name, "label": label, "matches": matches, "share_percent": round(share, 1)}


def analyze_presets(
    grants_df: pd.DataFrame, now: Optional[datetime] = None, config: Optional[FilterConfig] = None
) -> pd.DataFrame:
    """
    Count how many grants the default state and each preset match.

    Every preset is applied over the default filter, the way a user
    selecting it from a fresh session would see it.

    Returns:
        pd.DataFrame: Columns name, label, matches, share_percent
    """
    config = config or get_filter_config()
    if now is None:
        now = utc_now()

    total = len(grants_df)
    base = get_default_filter()
    rows = [_result_row("DEFAULT", "Default filters", count_matches(grants_df, base, now, config), total)]

    for key, preset in get_filter_presets(config).items():
        patched = base.merge(apply_filter_preset(base, key, config))
        rows.append(_result_row(key, preset.label, count_matches(grants_df, patched, now, config), total))

    logger.info(f"Analyzed {len(rows) - 1} presets against {total} grants")
    return pd.DataFrame(rows, columns=["name", "label", "matches", "share_percent"])


def analyze_range_presets(
    grants_df: pd.DataFrame, now: Optional[datetime] = None, config: Optional[FilterConfig] = None
) -> pd.DataFrame:
    """
    Count matches for every funding and deadline range picker option.

    Returns:
        pd.DataFrame: Columns dimension, name, label, matches, share_percent
    """
    config = config or get_filter_config()
    if now is None:
        now = utc_now()

    total = len(grants_df)
    base = get_default_filter()
    rows: List[Dict[str, Any]] = []

    for key in FUNDING_RANGE_PRESETS:
        patched = base.merge(funding_range_patch(key))
        row = _result_row(key, key.replace("_", " ").title(), count_matches(grants_df, patched, now, config), total)
        rows.append({"dimension": "funding", **row})

    for key in DEADLINE_RANGE_PRESETS:
        patched = base.merge(deadline_range_patch(key, config))
        row = _result_row(key, key.replace("_", " ").title(), count_matches(grants_df, patched, now, config), total)
        rows.append({"dimension": "deadline", **row})

    return pd.DataFrame(rows, columns=["dimension", "name", "label", "matches", "share_percent"])


def load_grants_csv(path: str) -> pd.DataFrame:
    """Load a grants export, parsing the deadline column as UTC."""
    grants_df = pd.read_csv(path)
    if "application_deadline" in grants_df.columns:
        grants_df["application_deadline"] = pd.to_datetime(
            grants_df["application_deadline"], utc=True, errors="coerce"
        )
    logger.info(f"Loaded {len(grants_df)} grants from {path}")
    return grants_df
