"""Constants and defaults.

Note: Keep business rules here to avoid magic numbers spread across code.
"""

# Check-ins after this hour (exclusive) are late: 09:59 is still on time, 10:00 is late.
DEFAULT_LATE_CUTOFF_HOUR = 9
DEFAULT_HALF_DAY_HOURS = 4.0

DEFAULT_RECENT_LIMIT = 7
DEFAULT_ALL_ATTENDANCE_LIMIT = 100
DEFAULT_TREND_DAYS = 7

CSV_COLUMNS = (
    "Date",
    "Employee ID",
    "Name",
    "Department",
    "Status",
    "Check In",
    "Check Out",
    "Total Hours",
)
