"""Engine modules for household scheduling.

Contains specialized computation engines:
- schedule_engine: Recurrence calculation and RRULE generation
- chore_engine: Due status, list ordering and completion planning
"""

# Use relative imports within package to avoid mypy module resolution issues
from .chore_engine import ChoreEngine, CompletionEffect
from .schedule_engine import RecurrenceEngine, first_occurrence, next_occurrence

__all__ = [
    "ChoreEngine",
    "CompletionEffect",
    "RecurrenceEngine",
    "first_occurrence",
    "next_occurrence",
]
