"""Tests for utils/dt_utils.py date helpers.

Tests cover:
- Sunday-based day of week
- Local day truncation in UTC and New York
- Interval arithmetic with month-end clamping
- Parsing and formatting
- Default timezone configuration
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names

from datetime import date, datetime
from zoneinfo import ZoneInfo

from freezegun import freeze_time
import pytest

from household.utils import dt_utils
from household.utils.dt_utils import (
    HELPER_RETURN_DATE,
    HELPER_RETURN_DATETIME_UTC,
    HELPER_RETURN_ISO_DATE,
    HELPER_RETURN_ISO_DATETIME,
    TIME_UNIT_DAYS,
    TIME_UNIT_MONTHS,
    TIME_UNIT_WEEKS,
    TIME_UNIT_YEARS,
    as_utc,
    dt_add_interval,
    dt_day_of_week,
    dt_format,
    dt_parse,
    dt_parse_date,
    dt_to_local_day,
    dt_today_local,
    get_default_timezone,
    set_default_timezone,
    start_of_local_day,
)

UTC_TZ = ZoneInfo("UTC")


class TestDayOfWeek:
    """dt_day_of_week counts from Sunday=0."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (date(2025, 6, 1), 0),  # Sunday
            (date(2025, 6, 2), 1),  # Monday
            (date(2025, 6, 4), 3),  # Wednesday
            (date(2025, 6, 7), 6),  # Saturday
            (datetime(2025, 6, 7, 23, 59), 6),
        ],
    )
    def test_day_of_week(self, value: date, expected: int) -> None:
        """Known calendar days map to Sunday-based numbers."""
        assert dt_day_of_week(value) == expected


class TestLocalDay:
    """Truncation to local midnight."""

    def test_start_of_local_day_utc(self) -> None:
        """Time of day is dropped, tzinfo kept."""
        result = start_of_local_day(datetime(2025, 6, 2, 18, 30, tzinfo=UTC_TZ))
        assert result == datetime(2025, 6, 2, tzinfo=UTC_TZ)

    def test_start_of_local_day_converts_first(self, new_york_tz: ZoneInfo) -> None:
        """An aware UTC time is converted to local before truncating."""
        result = start_of_local_day(datetime(2025, 6, 3, 2, 0, tzinfo=UTC_TZ))
        assert result.date() == date(2025, 6, 2)
        assert result.tzinfo == new_york_tz

    def test_naive_input_is_local_wall_clock(self, new_york_tz: ZoneInfo) -> None:
        """A naive datetime is read as local time, not UTC."""
        result = dt_to_local_day(datetime(2025, 6, 2, 23, 0))
        assert result == datetime(2025, 6, 2, tzinfo=new_york_tz)

    def test_to_local_day_from_string(self) -> None:
        """ISO strings are parsed then truncated."""
        assert dt_to_local_day("2025-06-02T10:15:00") == datetime(
            2025, 6, 2, tzinfo=UTC_TZ
        )

    def test_to_local_day_explicit_tz(self) -> None:
        """An explicit tz overrides the default."""
        tokyo = ZoneInfo("Asia/Tokyo")
        result = dt_to_local_day(datetime(2025, 6, 2, 20, 0, tzinfo=UTC_TZ), tokyo)
        assert result == datetime(2025, 6, 3, tzinfo=tokyo)

    @pytest.mark.parametrize("value", ["", "garbage", "2025-13-45"])
    def test_to_local_day_invalid(self, value: str) -> None:
        """Unparseable input raises ValueError."""
        with pytest.raises(ValueError):
            dt_to_local_day(value)


class TestAddInterval:
    """dt_add_interval units and clamping."""

    base = datetime(2025, 1, 31, tzinfo=UTC_TZ)

    @pytest.mark.parametrize(
        ("unit", "delta", "expected"),
        [
            (TIME_UNIT_DAYS, 1, date(2025, 2, 1)),
            (TIME_UNIT_WEEKS, 2, date(2025, 2, 14)),
            (TIME_UNIT_MONTHS, 1, date(2025, 2, 28)),
            (TIME_UNIT_MONTHS, 13, date(2026, 2, 28)),
            (TIME_UNIT_YEARS, 1, date(2026, 1, 31)),
            (TIME_UNIT_DAYS, -1, date(2025, 1, 30)),
        ],
    )
    def test_units(self, unit: str, delta: int, expected: date) -> None:
        """Each unit shifts by the expected calendar amount."""
        assert dt_add_interval(self.base, unit, delta).date() == expected

    def test_leap_day_year_clamp(self) -> None:
        """Feb 29 + 1 year = Feb 28."""
        leap = datetime(2024, 2, 29, tzinfo=UTC_TZ)
        assert dt_add_interval(leap, TIME_UNIT_YEARS, 1).date() == date(2025, 2, 28)

    def test_wall_clock_across_dst(self, new_york_tz: ZoneInfo) -> None:
        """Local midnight stays midnight across the November change."""
        base = datetime(2025, 11, 1, tzinfo=new_york_tz)
        result = dt_add_interval(base, TIME_UNIT_DAYS, 2)
        assert (result.day, result.hour) == (3, 0)

    def test_unknown_unit_raises(self) -> None:
        """Unknown units are rejected."""
        with pytest.raises(ValueError, match="fortnights"):
            dt_add_interval(self.base, "fortnights", 1)


class TestParsing:
    """dt_parse_date and dt_parse."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2025-04-07", date(2025, 4, 7)),
            ("04/07/2025", date(2025, 4, 7)),
            ("25/12/2025", date(2025, 12, 25)),
            ("2025/04/07", date(2025, 4, 7)),
            ("not-a-date", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_date(self, text: str | None, expected: date | None) -> None:
        """Supported formats parse; everything else is None."""
        assert dt_parse_date(text) == expected

    def test_parse_naive_string_gets_default_tz(self) -> None:
        """Naive strings are assigned the default timezone."""
        result = dt_parse("2025-04-15T08:00:00")
        assert result == datetime(2025, 4, 15, 8, 0, tzinfo=UTC_TZ)

    def test_parse_keeps_aware_offset(self) -> None:
        """Aware input keeps its own offset."""
        result = dt_parse("2025-04-15T08:00:00-05:00")
        assert isinstance(result, datetime)
        assert as_utc(result) == datetime(2025, 4, 15, 13, 0, tzinfo=UTC_TZ)

    def test_parse_datetime_before_date(self) -> None:
        """A datetime input keeps its time (not treated as a plain date)."""
        result = dt_parse(datetime(2025, 4, 15, 8, 30))
        assert isinstance(result, datetime)
        assert result.hour == 8

    def test_parse_date_object(self) -> None:
        """A date becomes midnight in the default zone."""
        assert dt_parse(date(2025, 4, 15)) == datetime(2025, 4, 15, tzinfo=UTC_TZ)

    @pytest.mark.parametrize("value", [None, "", "nope", 12345])
    def test_parse_invalid_returns_none(self, value: object) -> None:
        """Invalid input returns None instead of raising."""
        assert dt_parse(value) is None  # type: ignore[arg-type]


class TestFormatting:
    """dt_format return types."""

    value = datetime(2025, 6, 2, 0, 0, tzinfo=ZoneInfo("America/New_York"))

    def test_date(self) -> None:
        """HELPER_RETURN_DATE gives the date portion."""
        assert dt_format(self.value, HELPER_RETURN_DATE) == date(2025, 6, 2)

    def test_iso_date(self) -> None:
        """HELPER_RETURN_ISO_DATE gives YYYY-MM-DD."""
        assert dt_format(self.value, HELPER_RETURN_ISO_DATE) == "2025-06-02"

    def test_iso_datetime(self) -> None:
        """HELPER_RETURN_ISO_DATETIME includes the offset."""
        assert (
            dt_format(self.value, HELPER_RETURN_ISO_DATETIME)
            == "2025-06-02T00:00:00-04:00"
        )

    def test_utc(self) -> None:
        """HELPER_RETURN_DATETIME_UTC converts to UTC."""
        result = dt_format(self.value, HELPER_RETURN_DATETIME_UTC)
        assert result == datetime(2025, 6, 2, 4, 0, tzinfo=UTC_TZ)

    def test_default_unchanged(self) -> None:
        """No return type returns the datetime itself."""
        assert dt_format(self.value) is self.value


class TestDefaultTimezone:
    """Timezone configuration."""

    def test_set_and_get(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """set_default_timezone changes what get_default_timezone returns."""
        monkeypatch.setattr(dt_utils, "DEFAULT_TIME_ZONE", UTC_TZ)
        chicago = ZoneInfo("America/Chicago")

        set_default_timezone(chicago)

        assert get_default_timezone() == chicago

    @freeze_time("2025-01-15 03:00:00", tz_offset=0)
    def test_today_local_follows_timezone(self, new_york_tz: ZoneInfo) -> None:
        """03:00 UTC is still the previous day in New York."""
        assert dt_today_local() == date(2025, 1, 14)
        assert dt_today_local(UTC_TZ) == date(2025, 1, 15)
