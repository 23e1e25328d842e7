"""
Unit tests for core.filters.validator.

Covers the three conflict-resolution steps, their ordering, and that
validation is idempotent and never mutates its input.
"""

import unittest

from config.grant_filters import MAX_FUNDING
from core.filters.defaults import get_default_filter
from core.filters.models import GrantFilter
from core.filters.validator import is_valid_filter_state, validate_filter_state
from settings.infrastructure_config import FilterConfig


class TestFilterValidator(unittest.TestCase):
    """Test cases for validate_filter_state."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.config = FilterConfig(default_page_size=20, min_deadline_days=-90, max_deadline_days=365)

    def test_only_no_funding_forces_include_funding_null(self) -> None:
        """Test that only_no_funding with include_funding_null=False is repaired."""
        result = validate_filter_state({"only_no_funding": True, "include_funding_null": False}, self.config)

        self.assertEqual(result, {"only_no_funding": True, "include_funding_null": True})

    def test_only_no_funding_with_absent_include_flag(self) -> None:
        """Test that an absent include_funding_null is filled in."""
        result = validate_filter_state({"only_no_funding": True}, self.config)

        self.assertTrue(result["include_funding_null"])
        self.assertNotIn("funding_min", result)
        self.assertNotIn("funding_max", result)

    def test_only_no_funding_resets_funding_range(self) -> None:
        """Test that a stale funding range is replaced by the full range."""
        result = validate_filter_state(
            {"only_no_funding": True, "include_funding_null": True, "funding_min": 5_000, "funding_max": 10_000},
            self.config,
        )

        self.assertEqual(result["funding_min"], 0)
        self.assertEqual(result["funding_max"], MAX_FUNDING)

    def test_only_no_deadline_repairs_flags(self) -> None:
        """Test that only_no_deadline forces include_no_deadline and clears show_overdue."""
        result = validate_filter_state(
            {"only_no_deadline": True, "include_no_deadline": False, "show_overdue": True}, self.config
        )

        self.assertTrue(result["include_no_deadline"])
        self.assertFalse(result["show_overdue"])

    def test_only_no_deadline_resets_deadline_range(self) -> None:
        """Test that a stale deadline range is replaced by the configured window."""
        result = validate_filter_state(
            {"only_no_deadline": True, "deadline_min_days": 0, "deadline_max_days": 30}, self.config
        )

        self.assertEqual(result["deadline_min_days"], -90)
        self.assertEqual(result["deadline_max_days"], 365)

    def test_show_overdue_widens_non_negative_minimum(self) -> None:
        """Test that show_overdue with a future-only minimum is widened to the floor."""
        for min_days in (0, 7, 30):
            with self.subTest(min_days=min_days):
                result = validate_filter_state(
                    {"show_overdue": True, "deadline_min_days": min_days, "deadline_max_days": 60}, self.config
                )
                self.assertEqual(result["deadline_min_days"], -90)
                self.assertEqual(result["deadline_max_days"], 60)

    def test_show_overdue_keeps_negative_or_missing_minimum(self) -> None:
        """Test that a reachable overdue window is left alone."""
        self.assertEqual(
            validate_filter_state({"show_overdue": True, "deadline_min_days": -30}, self.config)["deadline_min_days"],
            -30,
        )
        self.assertNotIn("deadline_min_days", validate_filter_state({"show_overdue": True}, self.config))

    def test_show_overdue_uses_configured_floor(self) -> None:
        """Test that the widening target comes from config."""
        config = FilterConfig(min_deadline_days=-30, max_deadline_days=180)
        result = validate_filter_state({"show_overdue": True, "deadline_min_days": 0}, config)

        self.assertEqual(result["deadline_min_days"], -30)

    def test_only_no_deadline_runs_before_overdue_widening(self) -> None:
        """Test that step ordering leaves no overdue widening after only_no_deadline."""
        result = validate_filter_state(
            {"only_no_deadline": True, "show_overdue": True, "deadline_min_days": 10}, self.config
        )

        self.assertFalse(result["show_overdue"])
        self.assertEqual(result["deadline_min_days"], -90)

    def test_input_is_not_mutated(self) -> None:
        """Test that the caller's dict is left untouched."""
        patch = {"only_no_funding": True, "include_funding_null": False}
        validate_filter_state(patch, self.config)

        self.assertEqual(patch, {"only_no_funding": True, "include_funding_null": False})

    def test_grant_filter_in_grant_filter_out(self) -> None:
        """Test that a GrantFilter input returns a repaired GrantFilter."""
        grant_filter = GrantFilter(only_no_funding=True, include_funding_null=False)
        result = validate_filter_state(grant_filter, self.config)

        self.assertIsInstance(result, GrantFilter)
        self.assertTrue(result.include_funding_null)
        self.assertFalse(grant_filter.include_funding_null)

    def test_valid_filter_is_unchanged(self) -> None:
        """Test that validating an already valid filter returns it unchanged."""
        default = get_default_filter()

        self.assertEqual(validate_filter_state(default, self.config), default)
        self.assertTrue(is_valid_filter_state(default, self.config))

    def test_validation_is_idempotent(self) -> None:
        """Test that a second validation pass changes nothing."""
        samples = [
            {"only_no_funding": True, "include_funding_null": False, "funding_min": 10},
            {"only_no_deadline": True, "show_overdue": True, "deadline_max_days": 5},
            {"show_overdue": True, "deadline_min_days": 3},
            {"search_term": "climate", "statuses": []},
        ]
        for sample in samples:
            with self.subTest(sample=sample):
                once = validate_filter_state(sample, self.config)
                self.assertEqual(validate_filter_state(once, self.config), once)
                self.assertTrue(is_valid_filter_state(once, self.config))

    def test_is_valid_filter_state_detects_conflict(self) -> None:
        """Test that contradictory state is reported invalid."""
        self.assertFalse(is_valid_filter_state({"only_no_funding": True}, self.config))
        self.assertFalse(is_valid_filter_state(GrantFilter(show_overdue=True, deadline_min_days=0), self.config))

    def test_unrelated_fields_pass_through(self) -> None:
        """Test that fields outside the conflict rules are preserved."""
        patch = {"statuses": [], "search_term": "water", "unknown_key": 1}
        self.assertEqual(validate_filter_state(patch, self.config), patch)


if __name__ == "__main__":
    unittest.main()
