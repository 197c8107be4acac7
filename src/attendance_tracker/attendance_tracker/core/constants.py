"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Payroll month N runs from the 26th of month N-1 to the 25th of month N.
PAYROLL_CUTOFF_DAY = 26

STALE_AFTER_HOURS = 24

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_GEOFENCE_RADIUS_M = 100.0
EARTH_RADIUS_M = 6371e3

ALL_EMPLOYEES = "all"

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
