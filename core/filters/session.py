"""
Filter session - the lifecycle of one user's grant filter.

A session starts from the default state, is mutated one field at a time,
may be overwritten by a preset, and is validated and mapped when a search
runs. Sessions are single-owner; they are not shared across threads.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from settings.infrastructure_config import FilterConfig, get_filter_config

from .defaults import get_default_filter
from .mapper import QueryParams, map_filters_to_api
from .models import FILTER_FIELDS, GrantFilter
from .presets import apply_filter_preset
from .validator import validate_filter_state

logger = logging.getLogger(__name__)

# Changing any of these sends the user back to the first page
_PAGINATION_FIELDS = {"page", "limit"}


class FilterSession:
    """
    Mutable holder for the current grant filter.

    Example:
        >>> session = FilterSession()
        >>> session.update("search_term", "climate")
        >>> session.apply_preset("HIGH_FUNDING")
        >>> params = session.to_query_params()
    """

    def __init__(self, initial: Optional[GrantFilter] = None, config: Optional[FilterConfig] = None) -> None:
        """
        Initialize the session.

        Args:
            initial: Starting filter (defaults to the default filter state)
            config: Filter config shared by validation and mapping
        """
        self.config = config or get_filter_config()
        self._filter = initial.copy() if initial is not None else get_default_filter()

    @property
    def current(self) -> GrantFilter:
        """Get a copy of the current filter."""
        return self._filter.copy()

    def update(self, field_name: str, value: Any) -> GrantFilter:
        """
        Change a single filter field.

        Any change other than pagination resets the page to 1.

        Raises:
            ValueError: If field_name is not a GrantFilter field
        """
        if field_name not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {field_name}")

        patch: Dict[str, Any] = {field_name: value}
        if field_name not in _PAGINATION_FIELDS:
            patch["page"] = 1

        self._filter = self._filter.merge(patch)
        logger.debug(f"Filter field '{field_name}' updated")
        return self.current

    def update_many(self, patch: Mapping[str, Any]) -> GrantFilter:
        """Apply a partial filter (unknown keys are ignored) and reset the page."""
        merged = dict(patch)
        merged.setdefault("page", 1)
        self._filter = self._filter.merge(merged)
        return self.current

    def apply_preset(self, preset_key: str) -> GrantFilter:
        """Merge a named preset over the current filter. Unknown keys change nothing."""
        patch = apply_filter_preset(self._filter, preset_key, self.config)
        if not patch:
            return self.current

        logger.info(f"Applying filter preset '{preset_key}'")
        return self.update_many(patch)

    def reset(self) -> GrantFilter:
        """Return to the default filter state."""
        self._filter = get_default_filter()
        logger.debug("Filter session reset to defaults")
        return self.current

    def validate(self) -> GrantFilter:
        """Repair the current filter in place."""
        self._filter = validate_filter_state(self._filter, self.config)
        return self.current

    def to_query_params(self, now: Optional[datetime] = None) -> QueryParams:
        """Validate the current filter and map it to query parameters."""
        return map_filters_to_api(self.validate(), now=now, config=self.config)
