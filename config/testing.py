STORE_BACKEND = "memory"
DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "checkin_test",
}

USERS_COLLECTION = "Users"
ATTENDANCE_COLLECTION = "Attendance"
ENTRIES_COLLECTION = "Entries"
SHORTLIST_SIZE = 5
PRESENT_MARK = "✓"
ABSENT_MARK = "✗"

LOG_LEVEL = "WARNING"
LOG_FILE = None

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
