"""Tests for day-granularity date helpers."""

from datetime import date, datetime, timedelta

import pytest

from bookpace.pacing.dates import (
    days_remaining,
    end_of_current_month,
    is_past,
    parse_date,
    today,
)


class TestToday:
    """Tests for today()."""

    def test_returns_plain_date(self):
        """Test that today has no time-of-day part."""
        result = today()
        assert type(result) is date
        assert result == date.today()


class TestEndOfCurrentMonth:
    """Tests for end_of_current_month()."""

    def test_thirty_one_day_month(self):
        assert end_of_current_month(date(2024, 3, 15)) == date(2024, 3, 31)

    def test_leap_february(self):
        assert end_of_current_month(date(2024, 2, 3)) == date(2024, 2, 29)

    def test_common_february(self):
        assert end_of_current_month(date(2023, 2, 3)) == date(2023, 2, 28)

    def test_december(self):
        assert end_of_current_month(date(2024, 12, 1)) == date(2024, 12, 31)

    def test_last_day_is_itself(self):
        assert end_of_current_month(date(2024, 4, 30)) == date(2024, 4, 30)

    def test_default_uses_current_month(self):
        result = end_of_current_month()
        now = date.today()
        assert (result.year, result.month) == (now.year, now.month)
        assert (result + timedelta(days=1)).day == 1


class TestDaysRemaining:
    """Tests for days_remaining()."""

    def test_future_date(self, today):
        """Test whole days until a future date."""
        assert days_remaining(date(2024, 3, 31), today) == 16

    def test_tomorrow(self, today):
        assert days_remaining(date(2024, 3, 16), today) == 1

    def test_due_today_is_zero(self, today):
        assert days_remaining(today, today) == 0

    def test_past_clamped_to_zero(self, today):
        """Test that past dates never give negative days."""
        assert days_remaining(date(2024, 3, 10), today) == 0

    def test_across_month_and_leap_day(self):
        assert days_remaining(date(2024, 3, 1), date(2024, 2, 28)) == 2

    def test_time_of_day_ignored(self):
        """Test that 23:59 and 00:01 on the same day agree."""
        target = date(2024, 3, 20)
        late = datetime(2024, 3, 15, 23, 59)
        early = datetime(2024, 3, 15, 0, 1)
        assert days_remaining(target, late) == days_remaining(target, early) == 5

    def test_datetime_target(self, today):
        assert days_remaining(datetime(2024, 3, 16, 0, 30), today) == 1


class TestIsPast:
    """Tests for is_past()."""

    def test_yesterday_is_past(self, today):
        assert is_past(today - timedelta(days=1), today) is True

    def test_today_is_not_past(self, today):
        """Test that due today is not past due."""
        assert is_past(today, today) is False

    def test_future_is_not_past(self, today):
        assert is_past(date(2024, 3, 31), today) is False

    def test_time_of_day_ignored(self):
        assert is_past(date(2024, 3, 15), datetime(2024, 3, 15, 23, 59)) is False


class TestParseDate:
    """Tests for parse_date()."""

    def test_iso_string(self):
        assert parse_date("2024-03-31") == date(2024, 3, 31)

    def test_strips_whitespace(self):
        assert parse_date(" 2024-03-31 ") == date(2024, 3, 31)

    def test_date_passthrough(self):
        assert parse_date(date(2024, 3, 31)) == date(2024, 3, 31)

    def test_datetime_truncated(self):
        assert parse_date(datetime(2024, 3, 31, 18, 45)) == date(2024, 3, 31)

    @pytest.mark.parametrize("value", ["", "not a date", "2024-13-01", "2024-02-30", "20240331", "2024-W13-1"])
    def test_invalid_strings(self, value):
        with pytest.raises(ValueError):
            parse_date(value)

    def test_invalid_type(self):
        with pytest.raises(ValueError):
            parse_date(20240331)
