# File: const.py
"""Constants for the household scheduling library.

This file centralizes periods, weekday labels, data keys, defaults and error
keys so the engines, data builders and callers agree on the same values.
"""

import logging

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Recurrence Periods
# ------------------------------------------------------------------------------------------------
PERIOD_DAY = "day"
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
PERIOD_YEAR = "year"

# Stored documents and forms use several spellings for the same period
PERIOD_ALIASES = {
    PERIOD_DAY: PERIOD_DAY,
    "days": PERIOD_DAY,
    "daily": PERIOD_DAY,
    PERIOD_WEEK: PERIOD_WEEK,
    "weeks": PERIOD_WEEK,
    "weekly": PERIOD_WEEK,
    PERIOD_MONTH: PERIOD_MONTH,
    "months": PERIOD_MONTH,
    "monthly": PERIOD_MONTH,
    PERIOD_YEAR: PERIOD_YEAR,
    "years": PERIOD_YEAR,
    "yearly": PERIOD_YEAR,
    "annually": PERIOD_YEAR,
}

# Singular/plural labels for describe()
PERIOD_LABELS = {
    PERIOD_DAY: ("day", "days"),
    PERIOD_WEEK: ("week", "weeks"),
    PERIOD_MONTH: ("month", "months"),
    PERIOD_YEAR: ("year", "years"),
}

# RFC 5545 FREQ values
PERIOD_TO_RRULE_FREQ = {
    PERIOD_DAY: "DAILY",
    PERIOD_WEEK: "WEEKLY",
    PERIOD_MONTH: "MONTHLY",
    PERIOD_YEAR: "YEARLY",
}

# ------------------------------------------------------------------------------------------------
# Weekdays (Sunday = 0)
# ------------------------------------------------------------------------------------------------
SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6

DAYS_PER_WEEK = 7

# Lowercase day names, indexed Sunday-first
WEEKDAY_NAMES = [
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
]

WEEKDAY_ABBREVIATIONS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# RFC 5545 BYDAY tokens, indexed Sunday-first
WEEKDAY_RRULE_TOKENS = ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]

# ------------------------------------------------------------------------------------------------
# Data Keys
# ------------------------------------------------------------------------------------------------

# Recurrence rule
DATA_RULE_PERIOD = "period"
DATA_RULE_INTERVAL = "interval"
DATA_RULE_WEEKDAYS = "weekdays"

# Scheduled items (chores, maintenance tasks)
DATA_ITEM_TITLE = "title"
DATA_ITEM_IS_RECURRING = "is_recurring"
DATA_ITEM_RECURRENCE = "recurrence"
DATA_ITEM_NEXT_DUE_DATE = "next_due_date"
DATA_ITEM_DONE = "done"
DATA_ITEM_COMPLETED_AT = "completed_at"
DATA_ITEM_LAST_COMPLETED_AT = "last_completed_at"
DATA_ITEM_CREATED_AT = "created_at"

# Legacy document fields written by the web client
DOC_RECURRENCE_TYPE = "recurrenceType"
DOC_RECURRENCE_INTERVAL = "recurrenceInterval"
DOC_RECURRENCE_DAYS = "recurrenceDays"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_PERIOD = PERIOD_DAY
DEFAULT_INTERVAL = 1
DEFAULT_WEEKDAYS: list[int] = []

# Unrecognized periods advance by this many days
FALLBACK_ADVANCE_DAYS = 1

# Weekday scan bounds: first scan covers 14 + 7*interval days (inclusive start),
# next scan covers 7*interval + 7 days after the anchor (exclusive start).
FIRST_SCAN_BASE_DAYS = 14
NEXT_SCAN_EXTRA_DAYS = 7

# Safety limit for occurrence listings
MAX_OCCURRENCES = 100

# Items due within this many days of today (exclusive) are "upcoming"
DUE_SOON_DAYS = 7

# Anchor policies for rescheduling after completion
ANCHOR_POLICY_DUE_DATE = "due_date"
ANCHOR_POLICY_COMPLETION = "completion"
DEFAULT_ANCHOR_POLICY = ANCHOR_POLICY_DUE_DATE

# ------------------------------------------------------------------------------------------------
# Due Status
# ------------------------------------------------------------------------------------------------
DUE_STATUS_COMPLETED = "completed"
DUE_STATUS_PENDING = "pending"
DUE_STATUS_OVERDUE = "overdue"
DUE_STATUS_DUE_TODAY = "due_today"
DUE_STATUS_UPCOMING = "upcoming"
DUE_STATUS_LATER = "later"
DUE_STATUS_UNSCHEDULED = "unscheduled"

# ------------------------------------------------------------------------------------------------
# Error Keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_INVALID_PERIOD = "invalid_period"
TRANS_KEY_INVALID_INTERVAL = "invalid_interval"
TRANS_KEY_INTERVAL_TOO_SMALL = "interval_too_small"
TRANS_KEY_INVALID_WEEKDAY = "invalid_weekday"
