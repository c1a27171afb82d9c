"""Schedule Engine for household chores and maintenance reminders.

Computes due dates for recurring items from a RecurrenceRule:
- `first_occurrence`: initial due date when a recurring item is created
- `next_occurrence`: due date after the occurrence at `anchor_date` is completed

Weekday rules use a bounded day-by-day scan with a deterministic fallback.
Month/year arithmetic uses `dateutil.relativedelta` for clamping
(Jan 31 + 1 month = Feb 28, not skipped).

All inputs are truncated to local midnight before any arithmetic, and every
result is a local midnight. Nothing here reads the clock or keeps state.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from .. import const
from ..data_builders import InvalidRuleError, build_rule
from ..type_defs import RecurrenceRule
from ..utils.dt_utils import (
    HELPER_RETURN_DATETIME,
    TIME_UNIT_DAYS,
    TIME_UNIT_MONTHS,
    TIME_UNIT_WEEKS,
    TIME_UNIT_YEARS,
    dt_add_interval,
    dt_day_of_week,
    dt_format,
    dt_to_local_day,
)

if TYPE_CHECKING:
    from ..type_defs import RecurrenceRuleData

DateInput = str | date | datetime


class RecurrenceEngine:
    """Stateless recurrence calculator for one rule.

    Handles all periods:
    - day: every N days
    - week: every N weeks, or the nearest configured weekday
    - month / year: every N months/years with end-of-month clamping

    Unrecognized periods advance one day, unless strict is set.
    """

    PERIOD_TO_TIME_UNIT = {
        const.PERIOD_DAY: TIME_UNIT_DAYS,
        const.PERIOD_WEEK: TIME_UNIT_WEEKS,
        const.PERIOD_MONTH: TIME_UNIT_MONTHS,
        const.PERIOD_YEAR: TIME_UNIT_YEARS,
    }

    def __init__(self, rule: RecurrenceRule, strict: bool = False) -> None:
        """Initialize the recurrence engine.

        Args:
            rule: Recurrence rule (see data_builders.build_rule for raw input).
            strict: If True, an unrecognized period raises InvalidRuleError
                when an occurrence is requested.

        Note:
            Invalid interval values (<=0) are coerced to 1.
            Weekdays outside 0-6 are filtered out; weekdays are ignored unless
            the period is week.
        """
        self._rule = rule
        self._period = rule.period
        self._strict = strict

        # Validate interval: must be positive
        interval = rule.interval
        self._interval = max(1, interval) if interval else 1

        # Validate weekdays: only weekly rules, valid range 0-6
        self._weekdays: frozenset[int] = frozenset()
        if self._period == const.PERIOD_WEEK:
            self._weekdays = frozenset(
                d for d in rule.weekdays if const.SUNDAY <= d <= const.SATURDAY
            )

    @property
    def rule(self) -> RecurrenceRule:
        """Return the normalized rule this engine calculates for."""
        return RecurrenceRule(
            period=self._period, interval=self._interval, weekdays=self._weekdays
        )

    # =========================================================================
    # Public: occurrence calculation
    # =========================================================================

    def first_occurrence(self, from_date: DateInput) -> datetime:
        """Calculate the initial due date for a newly created recurring item.

        The weekday scan includes `from_date` itself, so a Monday chore created
        on a Monday is due that same day.

        Args:
            from_date: Reference date (typically today).

        Returns:
            First due date as local midnight.

        Raises:
            ValueError: If from_date cannot be parsed.
            InvalidRuleError: In strict mode, for an unrecognized period.
        """
        start = dt_to_local_day(from_date)

        if self._period == const.PERIOD_WEEK and self._weekdays:
            scan_days = const.FIRST_SCAN_BASE_DAYS + const.DAYS_PER_WEEK * self._interval
            match = self._scan_for_weekday(start, range(scan_days))
            if match is not None:
                return match
            const.LOGGER.warning(
                "RecurrenceEngine: No weekday in %s within %d days of %s, "
                "advancing %d week(s)",
                sorted(self._weekdays),
                scan_days,
                start.date(),
                self._interval,
            )
            return dt_add_interval(start, TIME_UNIT_WEEKS, self._interval)

        return self._advance(start)

    def next_occurrence(self, anchor_date: DateInput) -> datetime:
        """Calculate the next due date after the occurrence at `anchor_date`.

        The weekday scan starts the day after the anchor, so the result is
        always strictly later than the anchor.

        Args:
            anchor_date: Previous due date or completion time, as chosen by
                the caller.

        Returns:
            Next due date as local midnight.

        Raises:
            ValueError: If anchor_date cannot be parsed.
            InvalidRuleError: In strict mode, for an unrecognized period.
        """
        anchor = dt_to_local_day(anchor_date)

        if self._period == const.PERIOD_WEEK and self._weekdays:
            last_offset = const.DAYS_PER_WEEK * self._interval + const.NEXT_SCAN_EXTRA_DAYS
            match = self._scan_for_weekday(anchor, range(1, last_offset + 1))
            if match is not None:
                return match
            fallback = dt_add_interval(anchor, TIME_UNIT_WEEKS, self._interval)
            const.LOGGER.warning(
                "RecurrenceEngine: No weekday in %s within %d days after %s, "
                "snapping from %s",
                sorted(self._weekdays),
                last_offset,
                anchor.date(),
                fallback.date(),
            )
            return self._snap_to_weekday(fallback)

        return self._advance(anchor)

    def get_occurrences(
        self,
        start: DateInput,
        end: DateInput | None = None,
        limit: int = const.MAX_OCCURRENCES,
    ) -> list[datetime]:
        """Generate successive occurrences starting from `start`.

        The first entry is first_occurrence(start); each following entry is
        next_occurrence() of the previous one.

        Args:
            start: Reference date for the first occurrence.
            end: Optional last date to include (inclusive).
            limit: Maximum occurrences to return (safety limit).

        Returns:
            List of occurrence datetimes (local midnight), strictly increasing.
        """
        end_day = dt_to_local_day(end) if end is not None else None

        occurrences: list[datetime] = []
        current = self.first_occurrence(start)
        while len(occurrences) < limit:
            if end_day is not None and current > end_day:
                break
            occurrences.append(current)
            current = self.next_occurrence(current)

        return occurrences

    # =========================================================================
    # Public: presentation
    # =========================================================================

    def to_rrule_string(self) -> str:
        """Generate RFC 5545 RRULE string for iCal export.

        Returns:
            RRULE string (e.g., "FREQ=WEEKLY;INTERVAL=1;BYDAY=MO,WE,FR")
            or empty string if not representable.
        """
        freq = const.PERIOD_TO_RRULE_FREQ.get(self._period)
        if freq is None:
            return ""

        base = f"FREQ={freq};INTERVAL={self._interval}"
        if not self._weekdays:
            return base

        # Weekday rules pick the nearest matching day regardless of interval,
        # which RRULE can only express for interval 1.
        if self._interval > 1:
            return ""

        days = ",".join(const.WEEKDAY_RRULE_TOKENS[d] for d in sorted(self._weekdays))
        return f"{base};BYDAY={days}"

    def describe(self) -> str:
        """Return a human-readable label, e.g. "Every 2 weeks on Mon, Thu"."""
        labels = const.PERIOD_LABELS.get(self._period)
        if labels is None:
            return "Every day"

        singular, plural = labels
        text = (
            f"Every {singular}"
            if self._interval == 1
            else f"Every {self._interval} {plural}"
        )
        if self._weekdays:
            days = ", ".join(
                const.WEEKDAY_ABBREVIATIONS[d] for d in sorted(self._weekdays)
            )
            text = f"{text} on {days}"
        return text

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _advance(self, base: datetime) -> datetime:
        """Advance by interval periods (weekdays not involved)."""
        time_unit = self.PERIOD_TO_TIME_UNIT.get(self._period)
        if time_unit is None:
            if self._strict:
                raise InvalidRuleError(
                    field=const.DATA_RULE_PERIOD,
                    translation_key=const.TRANS_KEY_INVALID_PERIOD,
                    placeholders={"value": str(self._period)},
                )
            const.LOGGER.warning(
                "RecurrenceEngine: Unrecognized period %r, advancing %d day",
                self._period,
                const.FALLBACK_ADVANCE_DAYS,
            )
            return dt_add_interval(base, TIME_UNIT_DAYS, const.FALLBACK_ADVANCE_DAYS)

        return dt_add_interval(base, time_unit, self._interval)

    def _scan_for_weekday(self, base: datetime, offsets: range) -> datetime | None:
        """Return the first base + offset day whose weekday is configured."""
        for offset in offsets:
            candidate = base + timedelta(days=offset)
            if dt_day_of_week(candidate) in self._weekdays:
                return candidate
        return None

    def _snap_to_weekday(self, base: datetime) -> datetime:
        """Advance to the first configured weekday on or after base."""
        match = self._scan_for_weekday(base, range(const.DAYS_PER_WEEK))
        return match if match is not None else base


# =============================================================================
# Module-level convenience functions
# =============================================================================


def first_occurrence(
    rule: RecurrenceRule | RecurrenceRuleData | Mapping[str, Any],
    from_date: DateInput,
    *,
    strict: bool = False,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Compute the initial due date when a recurring item is first created.

    Args:
        rule: RecurrenceRule or raw rule data.
        from_date: Reference date (typically today).
        strict: Reject malformed rules instead of coercing them.
        return_type: Output format (HELPER_RETURN_* constant).

    Returns:
        First due date in the requested format.

    Examples:
        first_occurrence({"period": "week", "weekdays": [1]}, date(2025, 6, 2))
        → datetime(2025, 6, 2, 0, 0, tzinfo=...)  # Monday is due the same day
    """
    engine = RecurrenceEngine(build_rule(rule, strict=strict), strict=strict)
    return dt_format(engine.first_occurrence(from_date), return_type)


def next_occurrence(
    rule: RecurrenceRule | RecurrenceRuleData | Mapping[str, Any],
    anchor_date: DateInput,
    *,
    strict: bool = False,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Compute the next due date after the occurrence at `anchor_date`.

    Args:
        rule: RecurrenceRule or raw rule data.
        anchor_date: Previous due date or completion time.
        strict: Reject malformed rules instead of coercing them.
        return_type: Output format (HELPER_RETURN_* constant).

    Returns:
        Next due date in the requested format.

    Examples:
        next_occurrence({"period": "weekly", "weekdays": [1, 3, 5]}, "2025-06-02")
        → datetime(2025, 6, 4, 0, 0, tzinfo=...)  # Monday → Wednesday
    """
    engine = RecurrenceEngine(build_rule(rule, strict=strict), strict=strict)
    return dt_format(engine.next_occurrence(anchor_date), return_type)
