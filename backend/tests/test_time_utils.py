"""
Unit Tests for time helpers
"""

from datetime import datetime

import pytest

from src.utils.time_utils import APP_TZ, get_current_season, get_current_time, get_date_str, get_today_str


class TestCurrentSeason:
    @pytest.mark.parametrize("month,expected", [
        (1, 2024),
        (6, 2024),
        (7, 2025),
        (12, 2025),
    ])
    def test_season_start_year(self, month, expected):
        assert get_current_season(datetime(2025, month, 15)) == expected

    def test_defaults_to_now(self):
        now = get_current_time()
        assert get_current_season() in (now.year, now.year - 1)


class TestDateHelpers:
    def test_current_time_is_localized(self):
        assert get_current_time().tzinfo is not None
        assert get_current_time().tzinfo.zone == APP_TZ.zone

    def test_date_strings(self):
        today = get_today_str()
        assert len(today) == 10
        assert get_date_str(0) == today
        assert get_date_str(30) > today
