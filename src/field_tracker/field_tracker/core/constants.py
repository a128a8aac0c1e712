"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_SUMMARY_DAYS = 7
MIN_SUMMARY_DAYS = 1
MAX_SUMMARY_DAYS = 365

DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 365

# Location type that bypasses geofence verification.
OTHERS_LOCATION_TYPE = "others"

LOCATION_CODE_MAX_LENGTH = 15

DEFAULT_DB_TIMEOUT_SECONDS = 10
