import os


class Config:
    """Values shared by every environment; each module below picks from here."""

    # Document store
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "mysql")
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "checkin_db")
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

    # Collections
    USERS_COLLECTION = os.environ.get("USERS_COLLECTION", "Users")
    ATTENDANCE_COLLECTION = os.environ.get("ATTENDANCE_COLLECTION", "Attendance")
    ENTRIES_COLLECTION = os.environ.get("ENTRIES_COLLECTION", "Entries")

    # Check-in / export
    SHORTLIST_SIZE = int(os.environ.get("SHORTLIST_SIZE", "5"))
    PRESENT_MARK = os.environ.get("PRESENT_MARK", "✓")
    ABSENT_MARK = os.environ.get("ABSENT_MARK", "✗")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE") or None


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
