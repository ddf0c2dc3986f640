"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DATE_KEY_FORMAT = "%Y-%m-%d"

USERS_COLLECTION = "Users"
ATTENDANCE_COLLECTION = "Attendance"
ENTRIES_COLLECTION = "Entries"

ATTENDEES_FIELD = "attendees"

DEFAULT_SHORTLIST_SIZE = 5

UNKNOWN_MARKER = "Unknown"

PRESENT_MARK = "✓"
ABSENT_MARK = "✗"

EXPORT_FIXED_COLUMNS = ("Name", "Email", "StudentID")
