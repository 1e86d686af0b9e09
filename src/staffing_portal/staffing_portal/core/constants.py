"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_CHECK_IN_START_HOUR = 10
DEFAULT_CHECK_IN_END_HOUR = 11
DEFAULT_CHECK_OUT_START_HOUR = 19
SETTINGS_KEY = "attendance"

DEFAULT_LOCATION_RADIUS = 100
MIN_LOCATION_RADIUS = 10
MAX_LOCATION_RADIUS = 5000

DEFAULT_HISTORY_LIMIT = 31
DEFAULT_ADMIN_LIST_LIMIT = 100
DEFAULT_REPORT_DAYS = 7

LEAVE_REASON_MAX_LENGTH = 500
LEAVE_REVIEW_NOTE_MAX_LENGTH = 300
LEAVE_PAGE_SIZE_DEFAULT = 20
LEAVE_PAGE_SIZE_MAX = 50
ADMIN_LEAVE_PAGE_SIZE_DEFAULT = 50

ANNOUNCEMENT_TITLE_MAX_LENGTH = 150
ANNOUNCEMENT_CONTENT_MAX_LENGTH = 2000
ANNOUNCEMENT_FEED_PAGE_SIZE_DEFAULT = 10
ADMIN_ANNOUNCEMENT_PAGE_SIZE_DEFAULT = 50
ANNOUNCEMENT_PAGE_SIZE_MAX = 50

ACTIVITY_LOG_PAGE_SIZE_DEFAULT = 50
ACTIVITY_LOG_PAGE_SIZE_MAX = 100
ACTIVITY_LOG_RETENTION_DAYS = 90
