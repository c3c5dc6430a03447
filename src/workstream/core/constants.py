"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_WEEKEND = ("Sat", "Sun")

DEFAULT_COMPANY_NAME = "WorkStream Inc."
DEFAULT_CHECK_IN = "09:00"
DEFAULT_CHECK_OUT = "18:00"
DEFAULT_GRACE_MINUTES = 15
DEFAULT_SHIFT_HOURS = 9.0

FULL_DAY = 1.0
HALF_DAY = 0.5

DEFAULT_TOKEN_DAYS = 30
MIN_PASSWORD_LENGTH = 6
DEFAULT_HOLIDAY_TYPE = "Public"
DEFAULT_MEETING_PLATFORM = "Google Meet"
