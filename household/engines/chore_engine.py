"""Chore Engine - Pure logic for scheduled household items.

This engine provides stateless functions for callers that store chores and
maintenance tasks:
- Due status classification (overdue, due today, upcoming, ...)
- Active/upcoming list filtering and ordering
- Completion planning: the new due date after an item is completed

ARCHITECTURE: This is a pure logic engine. It never mutates the item passed
in and never persists anything; callers apply the returned CompletionEffect
to their own store.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING, Any, cast

from .. import const
from ..data_builders import build_rule
from ..utils.dt_utils import (
    HELPER_RETURN_DATETIME,
    as_utc,
    dt_now_local,
    dt_parse,
    dt_today_local,
    start_of_local_day,
)
from .schedule_engine import RecurrenceEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import ScheduledItemData


# =============================================================================
# COMPLETION EFFECT DATA STRUCTURE
# =============================================================================


@dataclass
class CompletionEffect:
    """Field updates a caller should store after completing an item.

    Recurring items get a new next_due_date and last_completed_at; one-off
    items are marked done with completed_at.
    """

    is_recurring: bool
    completed_at: datetime
    next_due_date: datetime | None = None
    done: bool = False

    def as_updates(self) -> dict[str, Any]:
        """Return the effect as a partial item dict (DATA_ITEM_* keys)."""
        if self.is_recurring:
            return {
                const.DATA_ITEM_NEXT_DUE_DATE: self.next_due_date,
                const.DATA_ITEM_LAST_COMPLETED_AT: self.completed_at,
            }
        return {
            const.DATA_ITEM_DONE: True,
            const.DATA_ITEM_COMPLETED_AT: self.completed_at,
        }


# =============================================================================
# CHORE ENGINE
# =============================================================================


class ChoreEngine:
    """Stateless helpers over ScheduledItemData dicts."""

    # =========================================================================
    # Query functions
    # =========================================================================

    @staticmethod
    def is_recurring(item: ScheduledItemData | dict[str, Any]) -> bool:
        """Check whether the item repeats."""
        return bool(item.get(const.DATA_ITEM_IS_RECURRING, False))

    @staticmethod
    def get_due_date(item: ScheduledItemData | dict[str, Any]) -> date | None:
        """Return the item's next due date as a local date, or None."""
        return ChoreEngine._to_local_date(item.get(const.DATA_ITEM_NEXT_DUE_DATE))

    @staticmethod
    def get_due_status(
        item: ScheduledItemData | dict[str, Any],
        today: date | None = None,
    ) -> str:
        """Classify an item for list display.

        Returns:
            DUE_STATUS_COMPLETED / DUE_STATUS_PENDING for one-off items,
            DUE_STATUS_OVERDUE / DUE_STATUS_DUE_TODAY / DUE_STATUS_UPCOMING
            (before today + DUE_SOON_DAYS) / DUE_STATUS_LATER for recurring
            items, DUE_STATUS_UNSCHEDULED when a recurring item has no due date.
        """
        if not ChoreEngine.is_recurring(item):
            if item.get(const.DATA_ITEM_DONE, False):
                return const.DUE_STATUS_COMPLETED
            return const.DUE_STATUS_PENDING

        due = ChoreEngine.get_due_date(item)
        if due is None:
            return const.DUE_STATUS_UNSCHEDULED

        today = today or dt_today_local()
        if due < today:
            return const.DUE_STATUS_OVERDUE
        if due == today:
            return const.DUE_STATUS_DUE_TODAY
        if due < today + timedelta(days=const.DUE_SOON_DAYS):
            return const.DUE_STATUS_UPCOMING
        return const.DUE_STATUS_LATER

    @staticmethod
    def is_active(
        item: ScheduledItemData | dict[str, Any],
        today: date | None = None,
    ) -> bool:
        """Check whether the item belongs on today's to-do list."""
        return ChoreEngine.get_due_status(item, today) in (
            const.DUE_STATUS_PENDING,
            const.DUE_STATUS_OVERDUE,
            const.DUE_STATUS_DUE_TODAY,
        )

    @staticmethod
    def sort_active(
        items: Iterable[ScheduledItemData | dict[str, Any]],
        today: date | None = None,
    ) -> list[ScheduledItemData | dict[str, Any]]:
        """Return active items ordered by due date (recurring) or creation time.

        Items missing the relevant date sort last.
        """
        today = today or dt_today_local()
        active = [item for item in items if ChoreEngine.is_active(item, today)]
        return sorted(active, key=ChoreEngine._active_sort_key)

    @staticmethod
    def get_upcoming(
        items: Iterable[ScheduledItemData | dict[str, Any]],
        today: date | None = None,
        within_days: int | None = None,
    ) -> list[ScheduledItemData | dict[str, Any]]:
        """Return recurring items due after today, soonest first.

        With within_days, only items due on or before today + within_days
        are included (the dashboard uses DUE_SOON_DAYS).
        """
        today = today or dt_today_local()
        upcoming = [
            item
            for item in items
            if ChoreEngine.get_due_status(item, today)
            in (const.DUE_STATUS_UPCOMING, const.DUE_STATUS_LATER)
        ]
        if within_days is not None:
            last_day = today + timedelta(days=within_days)
            upcoming = [
                item
                for item in upcoming
                if cast("date", ChoreEngine.get_due_date(item)) <= last_day
            ]
        return sorted(
            upcoming, key=lambda item: cast("date", ChoreEngine.get_due_date(item))
        )

    # =========================================================================
    # Scheduling functions
    # =========================================================================

    @staticmethod
    def needs_first_due_date(
        existing: ScheduledItemData | dict[str, Any] | None,
        is_recurring: bool,
    ) -> bool:
        """Check whether saving an item must compute a first due date.

        True for a new recurring item, an item switched from one-off to
        recurring, or a recurring item that has no due date yet.
        """
        if not is_recurring:
            return False
        if existing is None:
            return True
        if not ChoreEngine.is_recurring(existing):
            return True
        return existing.get(const.DATA_ITEM_NEXT_DUE_DATE) is None

    @staticmethod
    def calculate_first_due_date(
        item: ScheduledItemData | dict[str, Any],
        today: date | datetime | None = None,
    ) -> datetime | None:
        """Return the first due date for a recurring item, or None if one-off."""
        if not ChoreEngine.is_recurring(item):
            return None
        engine = RecurrenceEngine(build_rule(item.get(const.DATA_ITEM_RECURRENCE)))
        return engine.first_occurrence(today or dt_today_local())

    @staticmethod
    def calculate_completion(
        item: ScheduledItemData | dict[str, Any],
        completed_at: datetime | None = None,
        anchor_policy: str = const.DEFAULT_ANCHOR_POLICY,
    ) -> CompletionEffect:
        """Plan the updates for completing an item.

        Args:
            item: The item being completed.
            completed_at: Completion time. Defaults to now.
            anchor_policy: ANCHOR_POLICY_DUE_DATE anchors the next occurrence on
                the previous due date (falling back to completed_at when there
                is none), so late completions do not drift the schedule.
                ANCHOR_POLICY_COMPLETION always anchors on completed_at.

        Returns:
            CompletionEffect describing the fields to store.
        """
        completed_at = completed_at or dt_now_local()

        if not ChoreEngine.is_recurring(item):
            return CompletionEffect(
                is_recurring=False, completed_at=completed_at, done=True
            )

        anchor: date | datetime = completed_at
        if anchor_policy == const.ANCHOR_POLICY_DUE_DATE:
            due = ChoreEngine.get_due_date(item)
            if due is not None:
                anchor = due
        elif anchor_policy != const.ANCHOR_POLICY_COMPLETION:
            const.LOGGER.warning(
                "ChoreEngine: Unknown anchor policy %r, anchoring on completion",
                anchor_policy,
            )

        engine = RecurrenceEngine(build_rule(item.get(const.DATA_ITEM_RECURRENCE)))
        next_due = engine.next_occurrence(anchor)
        const.LOGGER.debug(
            "ChoreEngine: Completed %r, anchor=%s, next_due=%s",
            item.get(const.DATA_ITEM_TITLE),
            anchor,
            next_due.date(),
        )
        return CompletionEffect(
            is_recurring=True, completed_at=completed_at, next_due_date=next_due
        )

    # =========================================================================
    # Private helpers
    # =========================================================================

    @staticmethod
    def _to_local_date(value: Any) -> date | None:
        """Parse a stored date value into a local date."""
        parsed = dt_parse(value, return_type=HELPER_RETURN_DATETIME)
        if parsed is None:
            return None
        return start_of_local_day(cast("datetime", parsed)).date()

    @staticmethod
    def _active_sort_key(
        item: ScheduledItemData | dict[str, Any],
    ) -> tuple[int, datetime]:
        """Sort key: (missing flag, date) so items without a date go last."""
        key_field = (
            const.DATA_ITEM_NEXT_DUE_DATE
            if ChoreEngine.is_recurring(item)
            else const.DATA_ITEM_CREATED_AT
        )
        parsed = dt_parse(item.get(key_field), return_type=HELPER_RETURN_DATETIME)
        if parsed is None:
            return (1, datetime.max.replace(tzinfo=UTC))
        return (0, as_utc(cast("datetime", parsed)))
