"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Africa/Lagos"
DEFAULT_GRACE_MINUTES = 15
DEFAULT_DEDUP_WINDOW_SIZE = 1000
DEFAULT_DUPLICATE_TOLERANCE_MINUTES = 5

# Work duration within +/- this many minutes of the expected hours is a normal day.
WORK_DURATION_TOLERANCE_MINUTES = 30

MYSQL_DUPLICATE_ENTRY = 1062
