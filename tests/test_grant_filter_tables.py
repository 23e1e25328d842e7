"""
Unit tests for config.grant_filters and config.data_sources.
"""

import unittest

from config.data_sources import (
    DATA_SOURCE_MAPPING,
    get_data_source_options,
    is_uuid,
    map_data_source_to_uuid,
    map_data_sources_to_uuids,
)
from config.grant_filters import (
    DEFAULT_SORT,
    MAX_FUNDING,
    MAX_SAFE_FUNDING,
    SORT_MAPPING,
    get_currency_name,
    get_currency_options,
    get_sort_config,
    get_sort_options,
    get_status_options,
)


class TestGrantFilterTables(unittest.TestCase):
    """Test cases for the static filter tables."""

    def test_ceilings(self) -> None:
        """Test the funding ceiling and the true maximum."""
        self.assertEqual(MAX_FUNDING, 100_000_000)
        self.assertEqual(MAX_SAFE_FUNDING, 2**53 - 1)

    def test_every_sort_option_is_mapped(self) -> None:
        """Test sort options and mapping stay in sync."""
        self.assertIn(DEFAULT_SORT, SORT_MAPPING)
        for key in get_sort_options():
            self.assertIn(key, SORT_MAPPING)
            self.assertIn(SORT_MAPPING[key][1], ("asc", "desc"))

    def test_sort_config(self) -> None:
        """Test sort key lookup."""
        self.assertEqual(get_sort_config("amount"), ("funding_amount_max", "desc"))
        self.assertIsNone(get_sort_config("nope"))

    def test_status_and_currency_options(self) -> None:
        """Test enumerated backend values."""
        self.assertIn("forecasted", get_status_options())
        self.assertEqual(get_currency_options(), ["USD", "EUR", "GBP", "CAD"])
        self.assertEqual(get_currency_name("EUR"), "Euro")
        self.assertEqual(get_currency_name("JPY"), "JPY")


class TestDataSources(unittest.TestCase):
    """Test cases for data source mapping."""

    def test_known_names_map_to_uuids(self) -> None:
        """Test names, abbreviations and database names."""
        self.assertEqual(map_data_source_to_uuid("grants_gov"), DATA_SOURCE_MAPPING["Grants.gov"])
        self.assertEqual(map_data_source_to_uuid("NIH"), DATA_SOURCE_MAPPING["NIH RePORTER"])

    def test_uuids_and_unknown_names_pass_through(self) -> None:
        """Test pass-through values."""
        uuid = "07FBD9B2-E725-470E-A527-A4D36C8706A2"
        self.assertTrue(is_uuid(uuid))
        self.assertEqual(map_data_source_to_uuid(uuid), uuid)
        self.assertEqual(map_data_source_to_uuid("Local Foundation"), "Local Foundation")

    def test_order_preserved(self) -> None:
        """Test list mapping keeps input order."""
        result = map_data_sources_to_uuids(["World Bank Projects", "OpenAlex"])

        self.assertEqual(result, [DATA_SOURCE_MAPPING["World Bank Projects"], DATA_SOURCE_MAPPING["OpenAlex"]])

    def test_options_exclude_database_names(self) -> None:
        """Test the picker only lists display names."""
        options = get_data_source_options()

        self.assertIn("Grants.gov", options)
        self.assertNotIn("grants_gov", options)


if __name__ == "__main__":
    unittest.main()
