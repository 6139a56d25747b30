"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AuxType

DEFAULT_BREAK_LIMIT_MINUTES = 15
DEFAULT_LUNCH_LIMIT_MINUTES = 60

# Counted by the calendar date of the interval start.
ONCE_PER_DAY_AUX_TYPES = frozenset({AuxType.BREAK, AuxType.LUNCH, AuxType.LAST_BREAK})

DEFAULT_DAY_TYPE = "work"
DEFAULT_LIST_LIMIT = 200
DEFAULT_NOTIFICATION_LIMIT = 100

# Current AUX types that count an agent as "on break" on the wallboard.
ON_BREAK_AUX_TYPES = ONCE_PER_DAY_AUX_TYPES
