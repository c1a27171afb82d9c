# File: utils/dt_utils.py
"""Date and time utilities for household scheduling.

Pure Python date/time functions built on the standard library and dateutil.
All functions here can be unit tested without any application setup.

Functions:
    - set_default_timezone / get_default_timezone: Configure the local zone
    - dt_today_local: Get today's date in local timezone
    - dt_now_local: Get current datetime in local timezone
    - as_utc / as_local: Timezone conversion
    - start_of_local_day: Truncate to local midnight
    - dt_parse_date: Parse date strings
    - dt_parse: Normalize datetime inputs
    - dt_format: Format datetime to various output types
    - dt_add_interval: Add day/week/month/year intervals with clamping
    - dt_day_of_week: Sunday-based day-of-week number
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
from typing import TYPE_CHECKING, cast
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Time unit constants
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"

# Return type constants
HELPER_RETURN_DATETIME = "datetime"
HELPER_RETURN_DATETIME_UTC = "datetime_utc"
HELPER_RETURN_DATETIME_LOCAL = "datetime_local"
HELPER_RETURN_DATE = "date"
HELPER_RETURN_ISO_DATETIME = "iso_datetime"
HELPER_RETURN_ISO_DATE = "iso_date"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this once during application setup with the household's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in the default timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Naive datetimes are assumed to already be local wall-clock time.

    Args:
        dt_obj: Datetime object
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=tz_info)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get the start of day (00:00:00) for a datetime in local timezone.

    Args:
        dt_obj: Datetime object (can be in any timezone, or naive local time)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime at 00:00:00 in local timezone (timezone-aware)
    """
    local_dt = as_local(dt_obj, tz)
    return local_dt.replace(hour=0, minute=0, second=0, microsecond=0)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2025-04-07" (ISO format)
    - "04/07/2025" (US format)
    - "07/04/2025" (European format - attempted if US fails)
    - "2025/04/07"

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str | None:
    """Normalize various datetime input formats to a consistent format.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)
        return_type: Format for the returned value (HELPER_RETURN_* constant)

    Returns:
        Normalized datetime, date, or string based on return_type, or None if
        the input could not be parsed.

    Example:
        >>> dt_parse("2025-04-15")
        datetime.datetime(2025, 4, 15, 0, 0, tzinfo=zoneinfo.ZoneInfo(key='UTC'))

        >>> dt_parse("2025-04-15", return_type=HELPER_RETURN_ISO_DATE)
        '2025-04-15'
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input)
        except ValueError:
            parsed_date = dt_parse_date(dt_input)
            if parsed_date:
                result = datetime.combine(parsed_date, datetime.min.time())
            else:
                return None

    # Check datetime before date: datetime is a date subclass
    elif isinstance(dt_input, datetime):
        result = dt_input

    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())

    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)

    return dt_format(result, return_type)


# ==============================================================================
# Date/Time Formatting
# ==============================================================================


def dt_format(
    dt_obj: datetime,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Format a datetime object according to the specified return_type.

    Args:
        dt_obj: The datetime object to format
        return_type: The desired return format:
            - HELPER_RETURN_DATETIME: returns the datetime object unchanged
            - HELPER_RETURN_DATETIME_UTC: returns in UTC timezone
            - HELPER_RETURN_DATETIME_LOCAL: returns in local timezone
            - HELPER_RETURN_DATE: returns the date portion as a date object
            - HELPER_RETURN_ISO_DATETIME: returns an ISO-formatted datetime string
            - HELPER_RETURN_ISO_DATE: returns an ISO-formatted date string

    Returns:
        Formatted date/time value
    """
    if return_type == HELPER_RETURN_DATETIME_UTC:
        return as_utc(dt_obj)
    if return_type == HELPER_RETURN_DATETIME_LOCAL:
        return as_local(dt_obj)
    if return_type == HELPER_RETURN_DATE:
        return dt_obj.date()
    if return_type == HELPER_RETURN_ISO_DATETIME:
        return dt_obj.isoformat()
    if return_type == HELPER_RETURN_ISO_DATE:
        return dt_obj.date().isoformat()
    return dt_obj


# ==============================================================================
# Interval Calculations
# ==============================================================================


def dt_add_interval(
    base_dt: datetime,
    interval_unit: str,
    delta: int,
) -> datetime:
    """Add a time interval to a datetime.

    Arithmetic is done on local wall-clock time, so local midnight stays local
    midnight across DST changes. Months and years use relativedelta, which
    clamps to the last valid day (Jan 31 + 1 month = Feb 28).

    Args:
        base_dt: Base datetime.
        interval_unit: One of the TIME_UNIT_* constants.
        delta: Number of time units to add (negative subtracts).

    Returns:
        The shifted datetime.

    Raises:
        ValueError: If interval_unit is unknown.
    """
    if interval_unit == TIME_UNIT_DAYS:
        return base_dt + timedelta(days=delta)
    if interval_unit == TIME_UNIT_WEEKS:
        return base_dt + timedelta(weeks=delta)
    if interval_unit == TIME_UNIT_MONTHS:
        return base_dt + relativedelta(months=delta)
    if interval_unit == TIME_UNIT_YEARS:
        return base_dt + relativedelta(years=delta)

    _LOGGER.warning("dt_add_interval: Unknown interval_unit: %s", interval_unit)
    raise ValueError(f"Unknown interval_unit: {interval_unit}")


def dt_day_of_week(dt_obj: date) -> int:
    """Return the day of week with Sunday=0 through Saturday=6.

    Python's weekday() counts from Monday=0; household rules count from Sunday.
    """
    return (dt_obj.weekday() + 1) % 7


def dt_to_local_day(
    dt_input: str | date | datetime,
    tz: ZoneInfo | None = None,
) -> datetime:
    """Parse any supported date input and truncate it to local midnight.

    Raises:
        ValueError: If the input cannot be parsed.
    """
    parsed = dt_parse(dt_input, default_tzinfo=tz, return_type=HELPER_RETURN_DATETIME)
    if parsed is None:
        raise ValueError(f"Could not parse date: {dt_input!r}")
    return start_of_local_day(cast("datetime", parsed), tz)
