"""
Tests for core.analysis.filter_effectiveness.

The sample table (see conftest) holds six grants:
g1 active, $250k, due in 10 days
g2 active, $2M, due in 200 days
g3 forecasted, $40k, 5 days overdue
g4 active, $5k, no deadline, no currency
g5 closed, $150M, 120 days overdue
g6 active, no funding, due in 45 days
"""

from datetime import datetime

import pandas as pd
import pytest

from config.data_sources import DATA_SOURCE_MAPPING
from core.analysis.filter_effectiveness import (
    analyze_presets,
    analyze_range_presets,
    apply_query_params,
    count_matches,
    load_grants_csv,
)
from core.filters.defaults import get_default_filter
from core.filters.mapper import map_filters_to_api
from core.filters.models import GrantFilter
from settings.infrastructure_config import FilterConfig


def ids(df: pd.DataFrame) -> list:
    return sorted(df["id"].tolist())


class TestApplyQueryParams:
    def test_no_params_matches_everything(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        assert len(apply_query_params(sample_grants_df, {"page": 1, "limit": 20}, fixed_now)) == 6

    def test_none_sentinel_matches_nothing(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        assert apply_query_params(sample_grants_df, {"status": ["NONE"]}, fixed_now).empty
        assert apply_query_params(sample_grants_df, {"data_sources": ["NONE"]}, fixed_now).empty

    def test_status_membership(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        result = apply_query_params(sample_grants_df, {"status": ["forecasted", "closed"]}, fixed_now)

        assert ids(result) == ["g3", "g5"]

    def test_currency_null_inclusion(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        without_nulls = apply_query_params(sample_grants_df, {"currency": ["USD"]}, fixed_now)
        with_nulls = apply_query_params(sample_grants_df, {"currency": ["USD"], "include_no_currency": True}, fixed_now)

        assert ids(without_nulls) == ["g1", "g2", "g5"]
        assert ids(with_nulls) == ["g1", "g2", "g4", "g5"]

    def test_data_sources(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        params = {"data_sources": [DATA_SOURCE_MAPPING["Grants.gov"]]}

        assert ids(apply_query_params(sample_grants_df, params, fixed_now)) == ["g1", "g2"]

    def test_search_title_and_description(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        assert ids(apply_query_params(sample_grants_df, {"search": "climate"}, fixed_now)) == ["g3", "g5"]
        assert ids(apply_query_params(sample_grants_df, {"search": "internet"}, fixed_now)) == ["g2"]

    def test_funding_null_only(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        assert ids(apply_query_params(sample_grants_df, {"funding_null": True}, fixed_now)) == ["g6"]

    def test_funding_range_null_inclusion(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        strict = apply_query_params(sample_grants_df, {"funding_min": 100_000}, fixed_now)
        inclusive = apply_query_params(sample_grants_df, {"funding_min": 100_000, "include_no_funding": True}, fixed_now)

        assert ids(strict) == ["g1", "g2", "g5"]
        assert ids(inclusive) == ["g1", "g2", "g5", "g6"]

    def test_deadline_null_only(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        assert ids(apply_query_params(sample_grants_df, {"deadline_null": True}, fixed_now)) == ["g4"]

    def test_show_overdue_false_hides_past(self, sample_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        result = apply_query_params(sample_grants_df, {"show_overdue": False}, fixed_now)

        assert ids(result) == ["g1", "g2", "g4", "g6"]

    def test_deadline_window_from_mapper(
        self, sample_grants_df: pd.DataFrame, fixed_now: datetime, filter_config: FilterConfig
    ) -> None:
        params = map_filters_to_api(
            GrantFilter(deadline_min_days=0, deadline_max_days=60, include_no_deadline=False),
            now=fixed_now,
            config=filter_config,
        )

        assert ids(apply_query_params(sample_grants_df, params, fixed_now)) == ["g1", "g6"]

    def test_far_future_deadline_window(
        self, sample_grants_df: pd.DataFrame, fixed_now: datetime, filter_config: FilterConfig
    ) -> None:
        params = map_filters_to_api(
            GrantFilter(deadline_min_days=0, deadline_max_days=3_000_000, include_no_deadline=False),
            now=fixed_now,
            config=filter_config,
        )

        assert ids(apply_query_params(sample_grants_df, params, fixed_now)) == ["g1", "g2", "g6"]

    def test_empty_applicant_types_match_nothing(self, fixed_now: datetime, filter_config: FilterConfig) -> None:
        grants_df = pd.DataFrame([{"id": "g1", "status": "active", "eligible_applicant_types": ["nonprofit"]}])
        params = map_filters_to_api(GrantFilter(eligible_applicant_types=[]), now=fixed_now, config=filter_config)

        assert params["eligible_applicant_types"] == ["NONE"]
        assert apply_query_params(grants_df, params, fixed_now).empty

    def test_applicant_types_any_overlap(self, fixed_now: datetime) -> None:
        grants_df = pd.DataFrame(
            [
                {"id": "g1", "eligible_applicant_types": ["nonprofit", "university"]},
                {"id": "g2", "eligible_applicant_types": "small_business, individual"},
                {"id": "g3", "eligible_applicant_types": None},
            ]
        )

        assert ids(apply_query_params(grants_df, {"eligible_applicant_types": ["university"]}, fixed_now)) == ["g1"]
        assert ids(
            apply_query_params(grants_df, {"eligible_applicant_types": ["individual", "nonprofit"]}, fixed_now)
        ) == ["g1", "g2"]

    def test_empty_table(self, empty_grants_df: pd.DataFrame, fixed_now: datetime) -> None:
        assert apply_query_params(empty_grants_df, {"status": ["active"]}, fixed_now).empty


class TestPresetAnalysis:
    def test_count_matches_default(
        self, sample_grants_df: pd.DataFrame, fixed_now: datetime, filter_config: FilterConfig
    ) -> None:
        assert count_matches(sample_grants_df, get_default_filter(), fixed_now, filter_config) == 5

    def test_analyze_presets(
        self, sample_grants_df: pd.DataFrame, fixed_now: datetime, filter_config: FilterConfig
    ) -> None:
        report = analyze_presets(sample_grants_df, now=fixed_now, config=filter_config)
        matches = dict(zip(report["name"], report["matches"]))

        assert list(report.columns) == ["name", "label", "matches", "share_percent"]
        assert matches == {
            "DEFAULT": 5,
            "HIGH_FUNDING": 2,
            "LOW_FUNDING": 3,
            "OVERDUE": 1,
            "NO_DEADLINE": 1,
        }
        assert report.loc[report["name"] == "DEFAULT", "share_percent"].iloc[0] == pytest.approx(83.3)

    def test_analyze_range_presets(
        self, sample_grants_df: pd.DataFrame, fixed_now: datetime, filter_config: FilterConfig
    ) -> None:
        report = analyze_range_presets(sample_grants_df, now=fixed_now, config=filter_config)
        deadline = report[report["dimension"] == "deadline"].set_index("name")["matches"]
        funding = report[report["dimension"] == "funding"].set_index("name")["matches"]

        assert deadline["NEXT_30_DAYS"] == 2  # g1 plus undated g4
        assert deadline["ANY"] == 5
        assert funding["ANY"] == 5
        assert funding["1M_5M"] == 2  # g2 plus unfunded g6

    def test_load_grants_csv(self, sample_grants_df: pd.DataFrame, tmp_path) -> None:
        path = tmp_path / "grants.csv"
        sample_grants_df.to_csv(path, index=False)

        loaded = load_grants_csv(str(path))

        assert len(loaded) == 6
        assert str(loaded["application_deadline"].dt.tz) == "UTC"
