"""Recurrence rule validation and normalization helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Recurrence rule field defaults
- Rule validation (field-level error dicts)
- Normalizing raw form/document input into a RecurrenceRule

### Permissive vs strict
`build_rule()` is permissive by default, matching how the household app has
always treated stored rules: intervals below 1 become 1, unknown weekdays are
dropped, and an unknown period is kept so the engine falls back to advancing
one day. Pass `strict=True` (or use `validate_rule_input()` at a service
boundary) to reject malformed rules with InvalidRuleError instead.

Consumers:
- engines/schedule_engine.py (module-level first_occurrence/next_occurrence)
- engines/chore_engine.py (rules embedded in scheduled items)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import voluptuous as vol

from . import const
from .type_defs import RecurrenceRule, RecurrenceRuleData

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class InvalidRuleError(Exception):
    """Validation error with field-specific information for form highlighting.

    Raised when a recurrence rule fails validation in strict mode. The field
    attribute lets a form layer map the error back to the input that caused it.

    Attributes:
        field: The DATA_RULE_* constant identifying the failing field
        translation_key: The TRANS_KEY_* constant for the error message
        placeholders: Optional dict for translation string placeholders

    Example:
        raise InvalidRuleError(
            field=const.DATA_RULE_PERIOD,
            translation_key=const.TRANS_KEY_INVALID_PERIOD,
            placeholders={"value": "fortnightly"},
        )
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize InvalidRuleError.

        Args:
            field: The DATA_RULE_* constant for the field that failed validation
            translation_key: The TRANS_KEY_* constant for error message
            placeholders: Optional dict for translation placeholders
        """
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(translation_key)


# ==============================================================================
# SCHEMA
# ==============================================================================

RECURRENCE_RULE_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_RULE_PERIOD): vol.All(
            str, vol.Strip, vol.Lower, vol.In(const.PERIOD_ALIASES)
        ),
        vol.Optional(
            const.DATA_RULE_INTERVAL, default=const.DEFAULT_INTERVAL
        ): vol.All(vol.Coerce(int), vol.Range(min=1)),
        vol.Optional(const.DATA_RULE_WEEKDAYS, default=list): [
            vol.All(vol.Coerce(int), vol.Range(min=const.SUNDAY, max=const.SATURDAY))
        ],
    },
    extra=vol.REMOVE_EXTRA,
)

_FIELD_ERROR_KEYS = {
    const.DATA_RULE_PERIOD: const.TRANS_KEY_INVALID_PERIOD,
    const.DATA_RULE_INTERVAL: const.TRANS_KEY_INVALID_INTERVAL,
    const.DATA_RULE_WEEKDAYS: const.TRANS_KEY_INVALID_WEEKDAY,
}


def validate_rule_input(data: Mapping[str, Any]) -> RecurrenceRule:
    """Validate service input against RECURRENCE_RULE_SCHEMA and build the rule.

    Raises:
        InvalidRuleError: If the schema rejects the input. The field is the
            first key in the failing path.
    """
    try:
        validated = RECURRENCE_RULE_SCHEMA(dict(data))
    except vol.Invalid as err:
        errors = err.errors if isinstance(err, vol.MultipleInvalid) else [err]
        first = errors[0]
        field = str(first.path[0]) if first.path else const.DATA_RULE_PERIOD
        raise InvalidRuleError(
            field=field,
            translation_key=_FIELD_ERROR_KEYS.get(
                field, const.TRANS_KEY_INVALID_PERIOD
            ),
            placeholders={"error": first.msg},
        ) from err
    return build_rule(validated, strict=True)


# ==============================================================================
# FIELD COERCION
# ==============================================================================


def coerce_period(value: Any) -> str | None:
    """Map a period or alias ("weekly", "Months") to a PERIOD_* constant.

    Returns:
        PERIOD_* constant, or None if the value is not a known period.
    """
    if not isinstance(value, str):
        return None
    return const.PERIOD_ALIASES.get(value.strip().lower())


def coerce_interval(value: Any) -> int | None:
    """Convert interval input to int.

    Missing or empty values mean the default interval. Returns None when the
    value is not a whole number; range checks are left to the caller.
    """
    if value is None or value == "":
        return const.DEFAULT_INTERVAL
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


_WEEKDAY_ABBREVIATIONS = [abbr.lower() for abbr in const.WEEKDAY_ABBREVIATIONS]


def coerce_weekday(value: Any) -> int | None:
    """Convert a weekday number, numeric string or English name to 0-6.

    Sunday is 0. Returns None for anything out of range or unrecognized.
    """
    day: int | None = None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        day = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.lstrip("-").isdigit():
            day = int(text)
        elif text in const.WEEKDAY_NAMES:
            day = const.WEEKDAY_NAMES.index(text)
        elif text in _WEEKDAY_ABBREVIATIONS:
            day = _WEEKDAY_ABBREVIATIONS.index(text)

    if day is None or not const.SUNDAY <= day <= const.SATURDAY:
        return None
    return day


def weekday_values(value: Any) -> list[Any] | None:
    """Return raw weekdays input as a list of candidate days.

    A single day (3, "monday") becomes a one-element list. Returns None when
    the value is not a day or a collection of days.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str | int):
        return [value]
    if isinstance(value, list | tuple | set | frozenset):
        return list(value)
    return None


# ==============================================================================
# VALIDATION
# ==============================================================================


def validate_rule_data(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate recurrence rule business rules.

    Works with DATA_RULE_* keys (canonical storage format).

    Args:
        data: Raw rule data

    Returns:
        Dict of errors: {field: translation_key}
        Empty dict means validation passed.

    Validation Rules:
        1. Period is a known period or alias
        2. Interval is a whole number
        3. Interval >= 1
        4. Every weekday is 0-6 or a day name (weekly rules only)
    """
    errors: dict[str, str] = {}

    # === 1. Period ===
    period = coerce_period(data.get(const.DATA_RULE_PERIOD) or const.DEFAULT_PERIOD)
    if period is None:
        errors[const.DATA_RULE_PERIOD] = const.TRANS_KEY_INVALID_PERIOD
        return errors

    # === 2-3. Interval ===
    interval = coerce_interval(data.get(const.DATA_RULE_INTERVAL))
    if interval is None:
        errors[const.DATA_RULE_INTERVAL] = const.TRANS_KEY_INVALID_INTERVAL
        return errors
    if interval < 1:
        errors[const.DATA_RULE_INTERVAL] = const.TRANS_KEY_INTERVAL_TOO_SMALL
        return errors

    # === 4. Weekdays ===
    if period == const.PERIOD_WEEK:
        raw_days = weekday_values(data.get(const.DATA_RULE_WEEKDAYS))
        if raw_days is None or any(coerce_weekday(day) is None for day in raw_days):
            errors[const.DATA_RULE_WEEKDAYS] = const.TRANS_KEY_INVALID_WEEKDAY
            return errors

    return errors


# ==============================================================================
# BUILD
# ==============================================================================


def build_rule(
    data: RecurrenceRule | Mapping[str, Any] | None,
    *,
    strict: bool = False,
) -> RecurrenceRule:
    """Build a normalized RecurrenceRule from raw input.

    Args:
        data: A RecurrenceRule (returned as-is), raw rule data, or None for
            the default rule (every day)
        strict: If True, raise instead of coercing malformed values

    Returns:
        Normalized RecurrenceRule

    Raises:
        InvalidRuleError: In strict mode, if validate_rule_data() reports an error

    Examples:
        build_rule({"period": "weekly", "interval": "2", "weekdays": ["1", "3"]})
        → RecurrenceRule(period="week", interval=2, weekdays=frozenset({1, 3}))

        build_rule({"period": "day", "interval": 0})
        → RecurrenceRule(period="day", interval=1, weekdays=frozenset())
    """
    if isinstance(data, RecurrenceRule):
        return data
    data = data or {}

    if strict:
        errors = validate_rule_data(data)
        if errors:
            field, translation_key = next(iter(errors.items()))
            raise InvalidRuleError(
                field=field,
                translation_key=translation_key,
                placeholders={"value": str(data.get(field))},
            )

    # --- Period ---
    raw_period = data.get(const.DATA_RULE_PERIOD) or const.DEFAULT_PERIOD
    period = coerce_period(raw_period)
    if period is None:
        const.LOGGER.warning(
            "build_rule: Unrecognized period %r, occurrences will advance daily",
            raw_period,
        )
        period = str(raw_period).strip().lower()

    # --- Interval (always >= 1) ---
    raw_interval = data.get(const.DATA_RULE_INTERVAL)
    interval = coerce_interval(raw_interval)
    if interval is None or interval < 1:
        const.LOGGER.debug(
            "build_rule: Interval %r clamped to %d",
            raw_interval,
            const.DEFAULT_INTERVAL,
        )
        interval = const.DEFAULT_INTERVAL

    # --- Weekdays (weekly only) ---
    weekdays: frozenset[int] = frozenset()
    if period == const.PERIOD_WEEK:
        raw_days = data.get(const.DATA_RULE_WEEKDAYS, const.DEFAULT_WEEKDAYS)
        values = weekday_values(raw_days)
        days = [coerce_weekday(day) for day in values] if values is not None else [None]
        if None in days:
            const.LOGGER.debug("build_rule: Dropped invalid weekdays from %r", raw_days)
        weekdays = frozenset(day for day in days if day is not None)

    return RecurrenceRule(period=period, interval=interval, weekdays=weekdays)


def map_document_to_rule_data(doc: Mapping[str, Any]) -> RecurrenceRuleData:
    """Map a stored chore/maintenance document to rule data.

    The web client stores recurrence as recurrenceType/recurrenceInterval/
    recurrenceDays fields on the item document itself.
    """
    return {
        const.DATA_RULE_PERIOD: doc.get(const.DOC_RECURRENCE_TYPE)
        or const.DEFAULT_PERIOD,
        const.DATA_RULE_INTERVAL: doc.get(const.DOC_RECURRENCE_INTERVAL),
        const.DATA_RULE_WEEKDAYS: list(doc.get(const.DOC_RECURRENCE_DAYS) or []),
    }
