"""
Named filter presets.

A preset is a partial filter patch merged over the current filter. Each raw
patch is piped through validate_filter_state before it is returned, so every
preset is self-consistent on its own.

Also holds the funding and deadline range presets behind the range pickers
("Under $50K", "Next 30 days", ...).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from config.grant_filters import MAX_FUNDING, MAX_SAFE_INTEGER
from settings.infrastructure_config import FilterConfig, get_filter_config

from .models import GrantFilter
from .validator import validate_filter_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterPreset:
    """A named, pre-built partial filter."""

    label: str
    value: str
    filters: Dict[str, Any] = field(default_factory=dict)


def get_filter_presets(config: Optional[FilterConfig] = None) -> Dict[str, FilterPreset]:
    """
    Build the preset table for a deadline window.

    Args:
        config: Filter config providing the deadline floor and ceiling

    Returns:
        Dict[str, FilterPreset]: Preset key -> preset
    """
    config = config or get_filter_config()

    return {
        # Funding presets
        "HIGH_FUNDING": FilterPreset(
            label="High Funding (>$100k)",
            value="high-funding",
            filters={
                "funding_min": 100_000,
                "funding_max": MAX_FUNDING,
                "include_funding_null": False,
                "only_no_funding": False,
            },
        ),
        "LOW_FUNDING": FilterPreset(
            label="Low Funding (<$50k)",
            value="low-funding",
            filters={
                "funding_min": 0,
                "funding_max": 50_000,
                "include_funding_null": True,
                "only_no_funding": False,
            },
        ),
        # Deadline presets
        "OVERDUE": FilterPreset(
            label="Overdue Grants",
            value="overdue",
            filters={
                "deadline_min_days": config.min_deadline_days,
                "deadline_max_days": -1,
                "include_no_deadline": False,
                "only_no_deadline": False,
                "show_overdue": True,
            },
        ),
        "NO_DEADLINE": FilterPreset(
            label="No Deadline",
            value="no-deadline",
            filters={
                "only_no_deadline": True,
                "include_no_deadline": True,
                "show_overdue": False,
                "deadline_min_days": config.min_deadline_days,
                "deadline_max_days": config.max_deadline_days,
            },
        ),
    }


FILTER_PRESETS: Dict[str, FilterPreset] = get_filter_presets(FilterConfig())


def apply_filter_preset(
    current_filter: Optional[GrantFilter], preset_key: str, config: Optional[FilterConfig] = None
) -> Dict[str, Any]:
    """
    Get the validated patch for a preset.

    Unknown preset keys return an empty patch. ``current_filter`` is accepted
    so presets can depend on the filter they are applied to; none of the
    current presets do.

    Args:
        current_filter: Filter the patch will be merged over
        preset_key: Preset key, e.g. "HIGH_FUNDING"
        config: Filter config (defaults to the environment config)

    Returns:
        Dict[str, Any]: Self-consistent partial filter
    """
    config = config or get_filter_config()
    preset = get_filter_presets(config).get(preset_key)

    if preset is None:
        logger.debug(f"Unknown filter preset '{preset_key}', returning empty patch")
        return {}

    return validate_filter_state(dict(preset.filters), config)


def get_preset_options() -> List[Tuple[str, str]]:
    """Get (label, value) pairs for the preset picker."""
    return [(preset.label, preset.value) for preset in FILTER_PRESETS.values()]


def get_preset_key(preset_value: str) -> Optional[str]:
    """Get preset key from its value slug, e.g. "high-funding" -> "HIGH_FUNDING"."""
    for key, preset in FILTER_PRESETS.items():
        if preset.value == preset_value:
            return key
    return None


# Range picker presets - key -> (min, max); None means open
FUNDING_RANGE_PRESETS: Dict[str, Tuple[Optional[int], Optional[int]]] = {
    "ANY": (None, None),
    "ZERO": (0, 0),
    "UNDER_50K": (0, 50_000),
    "50K_100K": (50_000, 100_000),
    "100K_500K": (100_000, 500_000),
    "500K_1M": (500_000, 1_000_000),
    "1M_5M": (1_000_000, 5_000_000),
    "5M_10M": (5_000_000, 10_000_000),
    "10M_PLUS": (10_000_000, MAX_FUNDING),
    "100M_PLUS": (100_000_000, MAX_SAFE_INTEGER),
}

DEADLINE_RANGE_PRESETS: Dict[str, Tuple[Optional[int], Optional[int]]] = {
    "ANY": (None, None),
    "OVERDUE": (None, -1),  # floor filled in from config
    "NEXT_7_DAYS": (0, 7),
    "NEXT_30_DAYS": (0, 30),
    "NEXT_3_MONTHS": (0, 90),
    "NEXT_6_MONTHS": (0, 180),
    "THIS_YEAR": (0, 365),
    "90D_OVERDUE": (-90, -1),
}


def funding_range_patch(range_key: str) -> Dict[str, Any]:
    """
    Get the funding patch for a range picker option.

    Picking a range always clears "only no funding". Unknown keys return an
    empty patch.
    """
    if range_key not in FUNDING_RANGE_PRESETS:
        logger.debug(f"Unknown funding range '{range_key}', returning empty patch")
        return {}

    minimum, maximum = FUNDING_RANGE_PRESETS[range_key]
    return {"funding_min": minimum, "funding_max": maximum, "only_no_funding": False}


def deadline_range_patch(range_key: str, config: Optional[FilterConfig] = None) -> Dict[str, Any]:
    """
    Get the deadline patch for a range picker option.

    The patch always sets show_overdue so it stays consistent once merged:
    past and open ranges include overdue grants, future-only ranges do not
    (a future range merged over show_overdue=True would be widened back to
    the overdue floor by the validator). Unknown keys return an empty patch.
    """
    if range_key not in DEADLINE_RANGE_PRESETS:
        logger.debug(f"Unknown deadline range '{range_key}', returning empty patch")
        return {}

    config = config or get_filter_config()
    min_days, max_days = DEADLINE_RANGE_PRESETS[range_key]
    if range_key == "OVERDUE":
        min_days = config.min_deadline_days

    patch: Dict[str, Any] = {
        "deadline_min_days": min_days,
        "deadline_max_days": max_days,
        "only_no_deadline": False,
        "show_overdue": min_days is None or min_days < 0,
    }
    if range_key == "ANY":
        patch["include_no_deadline"] = True

    return validate_filter_state(patch, config)
