"""Type definitions for the household scheduling library.

TypedDicts describe raw data as it arrives from forms and stored documents
(all fields optional, since callers send partial data). RecurrenceRule is the
normalized, immutable form the engines work with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TypedDict

from . import const


class RecurrenceRuleData(TypedDict, total=False):
    """Raw recurrence rule input.

    Values are accepted loosely: period aliases ("weekly", "months"), numeric
    strings for interval, and day numbers or names for weekdays.
    """

    period: str  # PERIOD_* constant or alias from const.PERIOD_ALIASES
    interval: int | str | None  # Repeat every N periods (default: 1)
    weekdays: list[int | str]  # Sunday=0 .. Saturday=6, only for weekly rules


class ScheduledItemData(TypedDict, total=False):
    """A chore or maintenance task as stored by the caller."""

    title: str
    is_recurring: bool
    recurrence: RecurrenceRuleData | None
    next_due_date: str | date | datetime | None
    done: bool
    completed_at: str | date | datetime | None
    last_completed_at: str | date | datetime | None
    created_at: str | date | datetime | None


@dataclass(frozen=True)
class RecurrenceRule:
    """Normalized recurrence rule.

    Attributes:
        period: PERIOD_* constant (day, week, month, year)
        interval: Repeat every N periods
        weekdays: Sunday-based weekday numbers; only used when period is week
    """

    period: str = const.DEFAULT_PERIOD
    interval: int = const.DEFAULT_INTERVAL
    weekdays: frozenset[int] = field(default_factory=frozenset)

    def as_dict(self) -> RecurrenceRuleData:
        """Return the rule in its storable form."""
        return {
            const.DATA_RULE_PERIOD: self.period,
            const.DATA_RULE_INTERVAL: self.interval,
            const.DATA_RULE_WEEKDAYS: sorted(self.weekdays),
        }
