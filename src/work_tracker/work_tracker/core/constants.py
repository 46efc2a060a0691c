"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Fallback policy when no monthly settings exist for a month.
DEFAULT_WORKING_DAYS = 22
DEFAULT_DAILY_HOURS = 8.0

MAX_WORKING_DAYS = 31
MAX_DAILY_HOURS = 24.0

# Percentage at or above which a user is considered on track.
ON_TRACK_PERCENTAGE = 80.0

DEFAULT_LOGIN_DELAY_SECONDS = 1.0

STORAGE_PREFIX = "work_tracker"
TOKEN_KEY = f"{STORAGE_PREFIX}_token"
USER_KEY = f"{STORAGE_PREFIX}_user"
TIME_ENTRIES_KEY = f"{STORAGE_PREFIX}_time_entries"
MONTHLY_SETTINGS_KEY = f"{STORAGE_PREFIX}_monthly_settings"
