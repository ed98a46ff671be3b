"""Settings shared by every environment; each env module overrides what differs."""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

# Office QR code token for QR check-in
QR_TOKEN = os.getenv("QR_TOKEN", "OFFICE_CHECKIN_SYSTEM")

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
DEFAULT_GEOFENCE_RADIUS_METERS = float(os.getenv("DEFAULT_GEOFENCE_RADIUS_METERS", "100"))

# Fraction of expected hours below which a worked day is a half day.
# Pending product confirmation, hence configurable.
HALF_DAY_FRACTION = float(os.getenv("HALF_DAY_FRACTION", "0.5"))

# Weekdays treated as holidays (Monday=0 ... Sunday=6), comma separated.
WEEKLY_OFF_DAYS = tuple(int(d) for d in os.getenv("WEEKLY_OFF_DAYS", "6").split(",") if d.strip())

# Nominatim-compatible endpoint; empty disables reverse geocoding.
GEOCODER_URL = os.getenv("GEOCODER_URL", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
