"""Household scheduling library.

Recurrence calculations for chores and maintenance reminders. Callers own
persistence; this package only turns a rule and a date into a date.

Usage:
    from zoneinfo import ZoneInfo

    from household import first_occurrence, next_occurrence, set_default_timezone

    set_default_timezone(ZoneInfo("America/Chicago"))
    rule = {"period": "weekly", "interval": 1, "weekdays": [1, 3, 5]}
    due = first_occurrence(rule, "2025-06-02")
    due = next_occurrence(rule, due)
"""

from .data_builders import (
    InvalidRuleError,
    build_rule,
    map_document_to_rule_data,
    validate_rule_data,
    validate_rule_input,
)
from .engines import (
    ChoreEngine,
    CompletionEffect,
    RecurrenceEngine,
    first_occurrence,
    next_occurrence,
)
from .type_defs import RecurrenceRule
from .utils.dt_utils import get_default_timezone, set_default_timezone

__all__ = [
    "ChoreEngine",
    "CompletionEffect",
    "InvalidRuleError",
    "RecurrenceEngine",
    "RecurrenceRule",
    "build_rule",
    "first_occurrence",
    "get_default_timezone",
    "map_document_to_rule_data",
    "next_occurrence",
    "set_default_timezone",
    "validate_rule_data",
    "validate_rule_input",
]
