"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HALF_DAY_FRACTION = 0.5
DEFAULT_GEOFENCE_RADIUS_METERS = 100
DEFAULT_TIMEZONE = "UTC"
DEFAULT_HISTORY_DAYS = 30

# Longest history or summary window, in days (a leap year).
MAX_RANGE_DAYS = 366

# Mean Earth radius (IUGG), meters.
EARTH_RADIUS_METERS = 6_371_008.8

# Sunday, as datetime.date.weekday() numbers it.
DEFAULT_WEEKLY_OFF_DAYS = (6,)

STATUS_COLORS = {
    "PRESENT": "#10b981",
    "ABSENT": "#ef4444",
    "LATE": "#f59e0b",
    "ON_LEAVE": "#3b82f6",
    "HALF_DAY": "#8b5cf6",
    "HOLIDAY": "#6b7280",
    "NO_RECORD": "#d1d5db",
}
