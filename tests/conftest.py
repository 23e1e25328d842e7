"""
Pytest configuration and shared fixtures for Grantify.

This file contains pytest fixtures and configuration shared by the
integration-style tests under tests/.
"""

import os
import sys
from datetime import datetime, timezone
from typing import Any

import pandas as pd
import pytest

# Keep tests independent of a developer's .env
os.environ.pop("GRANTIFY_DEFAULT_PAGE_SIZE", None)
os.environ.pop("GRANTIFY_MIN_DEADLINE_DAYS", None)
os.environ.pop("GRANTIFY_MAX_DEADLINE_DAYS", None)

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from settings.infrastructure_config import FilterConfig, reset_environment_manager  # noqa: E402


def pytest_collection_modifyitems(config: Any, items: Any) -> None:
    """Automatically categorize tests based on their names."""
    for item in items:
        # Mark cache tests
        if any(keyword in item.name.lower() for keyword in ["cache", "redis"]):
            item.add_marker("cache")

        # Mark filter tests
        if any(keyword in item.name.lower() for keyword in ["filter", "preset", "mapper", "validator"]):
            item.add_marker("filters")

        # Mark as unit tests by default
        if not any(item.iter_markers()):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def fresh_environment_manager() -> Any:
    """Re-read configuration for every test."""
    reset_environment_manager()
    yield
    reset_environment_manager()


@pytest.fixture
def fixed_now() -> datetime:
    """Reference instant all deadline tests resolve against."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def filter_config() -> FilterConfig:
    """Filter config with the stock page size and deadline window."""
    return FilterConfig(default_page_size=20, min_deadline_days=-90, max_deadline_days=365)


@pytest.fixture
def sample_grants_df(fixed_now: datetime) -> pd.DataFrame:
    """Small grants table covering every null/override combination."""
    day = pd.Timedelta(days=1)
    now = pd.Timestamp(fixed_now)
    return pd.DataFrame(
        {
            "id": ["g1", "g2", "g3", "g4", "g5", "g6"],
            "title": [
                "Clean Water Initiative",
                "Rural Broadband Expansion",
                "Climate Research Fellowship",
                "Arts Council Micro Grant",
                "Ocean Climate Observatory",
                "Community Health Workers",
            ],
            "description": [
                "Drinking water infrastructure",
                "Internet access for rural areas",
                "Postdoctoral climate science",
                "Small grants for local artists",
                "Long-term ocean monitoring",
                None,
            ],
            "status": ["active", "active", "forecasted", "active", "closed", "active"],
            "currency": ["USD", "USD", "EUR", None, "USD", "CAD"],
            "data_source_id": [
                "35662128-107f-450c-904e-feaeba3caa2c",
                "35662128-107f-450c-904e-feaeba3caa2c",
                "cba84e15-d24d-4b27-81c0-24cc583fa0bb",
                "9d0483f6-0620-40ac-85f7-ccf047a2879b",
                "2a7b0850-aaa7-49f0-8615-6797dc21e5b1",
                "4f0acd83-72f4-4d98-b157-e8570c31d7f7",
            ],
            "funding_amount_min": [50_000, None, 20_000, 1_000, None, None],
            "funding_amount_max": [250_000, 2_000_000, 40_000, 5_000, 150_000_000, None],
            "application_deadline": [
                now + 10 * day,
                now + 200 * day,
                now - 5 * day,
                None,
                now - 120 * day,
                now + 45 * day,
            ],
        }
    )


@pytest.fixture
def empty_grants_df() -> pd.DataFrame:
    """Empty DataFrame for edge case testing."""
    return pd.DataFrame()
