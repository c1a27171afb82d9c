# File: utils/__init__.py
"""Pure Python utilities for household scheduling.

Submodules:
    - dt_utils: Date/time parsing, formatting, interval arithmetic

Usage:
    from . import dt_utils
    from .dt_utils import start_of_local_day
"""

from . import dt_utils

__all__ = ["dt_utils"]
