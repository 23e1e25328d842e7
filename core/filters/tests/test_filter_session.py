"""
Unit tests for core.filters.session.
"""

from datetime import datetime, timezone

import pytest

from config.grant_filters import NONE_SENTINEL
from core.filters.models import GrantFilter
from core.filters.session import FilterSession
from settings.infrastructure_config import FilterConfig

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def session() -> FilterSession:
    return FilterSession(config=FilterConfig())


class TestFilterSession:
    def test_starts_from_default(self, session: FilterSession) -> None:
        assert session.current.statuses == ["active", "forecasted"]
        assert session.current.page == 1

    def test_update_resets_page(self, session: FilterSession) -> None:
        session.update("page", 5)
        assert session.current.page == 5

        session.update("search_term", "education")
        assert session.current.page == 1
        assert session.current.search_term == "education"

    def test_update_limit_keeps_page(self, session: FilterSession) -> None:
        session.update("page", 3)
        session.update("limit", 6)

        assert session.current.page == 3
        assert session.current.limit == 6

    def test_update_unknown_field_raises(self, session: FilterSession) -> None:
        with pytest.raises(ValueError, match="Unknown filter field"):
            session.update("not_a_field", 1)

    def test_current_is_a_copy(self, session: FilterSession) -> None:
        session.current.statuses.append("closed")

        assert session.current.statuses == ["active", "forecasted"]

    def test_apply_preset(self, session: FilterSession) -> None:
        session.update("page", 2)
        result = session.apply_preset("NO_DEADLINE")

        assert result.only_no_deadline is True
        assert result.show_overdue is False
        assert result.page == 1

    def test_apply_unknown_preset_is_noop(self, session: FilterSession) -> None:
        before = session.current
        assert session.apply_preset("UNKNOWN") == before

    def test_reset(self, session: FilterSession) -> None:
        session.update("statuses", [])
        session.reset()

        assert session.current.statuses == ["active", "forecasted"]

    def test_to_query_params_validates_first(self) -> None:
        session = FilterSession(
            initial=GrantFilter(only_no_funding=True, include_funding_null=False, funding_min=100),
            config=FilterConfig(),
        )
        params = session.to_query_params(now=NOW)

        assert params["funding_null"] is True
        assert "funding_min" not in params
        assert session.current.include_funding_null is True

    def test_cleared_selection_matches_nothing(self, session: FilterSession) -> None:
        session.update("currencies", [])

        assert session.to_query_params(now=NOW)["currency"] == [NONE_SENTINEL]
