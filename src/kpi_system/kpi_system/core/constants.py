"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ACHIEVEMENT_CAP_PERCENT = 120.0
COMPLETION_PERCENT = 100.0
MAX_WEIGHT = 100.0

DEFAULT_SESSION_DAYS = 7
DEFAULT_TREND_LIMIT = 12

PERIOD_FORMAT = "%Y-%m"
