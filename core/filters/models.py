"""
Grant filter data model.

GrantFilter is the flat, UI-facing description of the grants a user wants to
see. Every optional field uses None for "no restriction"; list fields also
accept an explicit empty list, which means "match nothing" and is never the
same as None.

Because the flat record overloads None, empty and explicit values, the
mapper never reads the ranged or set-membership fields directly. It goes
through the per-dimension projections at the bottom of this module:

- funding_dimension  -> Unrestricted | FundingRange | OnlyNoFunding
- deadline_dimension -> Unrestricted | DeadlineRange | OnlyNoDeadline
- membership_dimension -> Unrestricted | MatchNone | MatchAny

so the override flags are checked in exactly one place.
"""

import copy
import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from config.grant_filters import DEFAULT_PAGE, DEFAULT_SORT, MAX_SAFE_INTEGER

logger = logging.getLogger(__name__)


@dataclass
class GrantFilter:
    """
    User-facing grant filter.

    Attributes mirror the search panel one to one. Lifecycle: built from the
    default state, mutated one field at a time, optionally overwritten by a
    preset, repaired by the validator and finally mapped to query parameters.
    """

    # Search
    search_term: str = ""

    # Funding
    funding_min: Optional[float] = None
    funding_max: Optional[float] = None
    include_funding_null: bool = True
    only_no_funding: bool = False

    # Deadline (offsets in days from "now", negative = overdue)
    deadline_min_days: Optional[float] = None
    deadline_max_days: Optional[float] = None
    include_no_deadline: bool = True
    only_no_deadline: bool = False
    show_overdue: Optional[bool] = None

    # Set-membership filters
    statuses: Optional[List[str]] = None
    currencies: Optional[List[str]] = None
    organizations: Optional[List[str]] = None
    grant_types: Optional[List[str]] = None
    eligible_applicant_types: Optional[List[str]] = None
    data_source_ids: Optional[List[str]] = None
    sources: Optional[List[str]] = None  # legacy alias of data_source_ids

    # Missing-data inclusion for non-ranged fields
    include_no_currency: Optional[bool] = None
    include_no_geographic_scope: Optional[bool] = None

    # Geography
    geographic_scope: Optional[str] = None
    countries: Optional[List[str]] = None
    states: Optional[List[str]] = None

    # Identifiers and dates
    cfda_numbers: Optional[List[str]] = None
    opportunity_number: Optional[str] = None
    post_date_from: Optional[str] = None
    post_date_to: Optional[str] = None

    # Featured / popularity
    only_featured: bool = False
    min_view_count: Optional[int] = None
    min_save_count: Optional[int] = None

    # Sorting and pagination
    sort_by: str = DEFAULT_SORT
    page: int = DEFAULT_PAGE
    limit: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict (lists are copied)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GrantFilter":
        """
        Build a filter from a dict, ignoring keys that are not filter fields.

        Missing keys take the dataclass defaults.
        """
        known = {key: copy.deepcopy(value) for key, value in data.items() if key in FILTER_FIELDS}
        unknown = set(data) - FILTER_FIELDS
        if unknown:
            logger.debug(f"Ignoring unknown filter keys: {sorted(unknown)}")
        return cls(**known)

    def merge(self, patch: Mapping[str, Any]) -> "GrantFilter":
        """Return a new filter with the patch applied over this one."""
        known = {key: copy.deepcopy(value) for key, value in patch.items() if key in FILTER_FIELDS}
        return replace(self, **known)

    def copy(self) -> "GrantFilter":
        """Deep copy, so list fields are never shared between filters."""
        return copy.deepcopy(self)


FILTER_FIELDS: FrozenSet[str] = frozenset(field.name for field in fields(GrantFilter))


# ---------------------------------------------------------------------------
# Per-dimension views
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Unrestricted:
    """No restriction on this dimension."""


@dataclass(frozen=True)
class FundingRange:
    """Numeric funding range; either bound may be open."""

    minimum: Optional[float]
    maximum: Optional[float]
    include_null: Optional[bool]


@dataclass(frozen=True)
class OnlyNoFunding:
    """Only grants without funding data."""


@dataclass(frozen=True)
class DeadlineRange:
    """Deadline window as day offsets from "now"; either bound may be open."""

    min_days: Optional[float]
    max_days: Optional[float]
    include_null: Optional[bool]


@dataclass(frozen=True)
class OnlyNoDeadline:
    """Only grants without a deadline."""


@dataclass(frozen=True)
class MatchNone:
    """Explicitly empty selection: match no rows."""


@dataclass(frozen=True)
class MatchAny:
    """Match rows whose value is one of ``values`` (order preserved)."""

    values: Tuple[str, ...]


FundingFilter = Union[Unrestricted, FundingRange, OnlyNoFunding]
DeadlineFilter = Union[Unrestricted, DeadlineRange, OnlyNoDeadline]
MembershipFilter = Union[Unrestricted, MatchNone, MatchAny]


def funding_dimension(grant_filter: GrantFilter) -> FundingFilter:
    """
    Project the funding fields of a filter.

    "Any amount" (minimum exactly 0 and no maximum) is Unrestricted: some
    backend range queries treat an explicit 0 lower bound as restrictive.
    """
    if grant_filter.only_no_funding:
        return OnlyNoFunding()

    minimum = grant_filter.funding_min
    maximum = grant_filter.funding_max

    if maximum is None and (minimum is None or minimum == 0):
        return Unrestricted()

    return FundingRange(minimum=minimum, maximum=maximum, include_null=grant_filter.include_funding_null)


def _is_bounded(days: Optional[float]) -> bool:
    return days is not None and math.isfinite(days) and abs(days) < MAX_SAFE_INTEGER


def deadline_dimension(grant_filter: GrantFilter) -> DeadlineFilter:
    """
    Project the deadline fields of a filter.

    Infinite or MAX_SAFE_INTEGER offsets mean "open" and are dropped.
    """
    if grant_filter.only_no_deadline:
        return OnlyNoDeadline()

    min_days = grant_filter.deadline_min_days if _is_bounded(grant_filter.deadline_min_days) else None
    max_days = grant_filter.deadline_max_days if _is_bounded(grant_filter.deadline_max_days) else None

    if min_days is None and max_days is None:
        return Unrestricted()

    return DeadlineRange(min_days=min_days, max_days=max_days, include_null=grant_filter.include_no_deadline)


def membership_dimension(values: Optional[Sequence[str]]) -> MembershipFilter:
    """Project a set-membership field: None, empty and non-empty all differ."""
    if values is None:
        return Unrestricted()
    if len(values) == 0:
        return MatchNone()
    return MatchAny(values=tuple(values))
