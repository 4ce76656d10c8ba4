"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_HOURS = 24
DEFAULT_COOKIE_DAYS = 7
DEFAULT_RATE_LIMIT = "100 per 15 minutes"

DEFAULT_SCHOOL_START = "07:00"
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_MIN_ATTENDANCE_HOUR = 5
DEFAULT_MAX_ATTENDANCE_HOUR = 18

# Class-context scans open this many minutes before the lesson starts.
CLASS_SCAN_OPENS_MINUTES = 30

MIN_PASSWORD_LENGTH = 6
DEFAULT_PAGE_SIZE = 10

TOKEN_COOKIE_NAME = "token"
