"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for the equipment catalog and booking grid
PATTERN: Modular constants organized by category
SCOPE: Application-wide configuration values
"""
from tracking import t

# Booking grid
DAY_START_HOUR = 8
DAY_END_HOUR = 21          # inclusive: 21:00 is the last selectable time
SLOT_STEP_MINUTES = 30

DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "10:00"

# Form
PASSWORD_MAX_LENGTH = 6

# Storage
DEFAULT_COLLECTION = "bookings"
DEFAULT_STORE_TIMEOUT_SECONDS = 10.0
SYNC_WATCHDOG_INTERVAL_SECONDS = 5.0

# Notifications
NOTIFICATION_DURATION_SECONDS = 4.0

# Display
DEFAULT_TIMEZONE = "Asia/Taipei"
DEFAULT_DISPLAY_LANGUAGE = "zh-TW"
DATE_PICKER_DAYS = 14

# Equipment catalog: id -> (name, icon)
EQUIPMENT_CATALOG = {
    "projector": ("投影機", "📽️"),
    "mobile-screen": ("移動式螢幕", "🖥️"),
}

# Document field names as stored in the remote collection
FIELD_USER_NAME = "userName"
FIELD_EQUIPMENT_ID = "equipmentId"
FIELD_DATE = "date"
FIELD_START_TIME = "startTime"
FIELD_END_TIME = "endTime"
FIELD_PASSWORD = "password"
FIELD_CREATED_AT = "createdAt"


def equipment_ids() -> list:
    """Return catalog ids in display order."""
    t('infrastructure.constants.equipment_ids')
    return list(EQUIPMENT_CATALOG)
