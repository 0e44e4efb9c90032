"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_UTC_OFFSET_HOURS = 8
DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMAT = "%H:%M:%S"

ADMIN_PIN_HEADER = "x-admin-pin"

CSV_HEADER = ["Player ID", "Name", "Date", "Time In", "Time Out", "Total Hours", "Status"]

MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_CHECK_CONSTRAINT_VIOLATED = 3819
