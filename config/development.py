import os

from .config import DB_CONFIG, Config

STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
DB_CONFIG = DB_CONFIG

USERS_COLLECTION = Config.USERS_COLLECTION
ATTENDANCE_COLLECTION = Config.ATTENDANCE_COLLECTION
ENTRIES_COLLECTION = Config.ENTRIES_COLLECTION
SHORTLIST_SIZE = Config.SHORTLIST_SIZE
PRESENT_MARK = Config.PRESENT_MARK
ABSENT_MARK = Config.ABSENT_MARK

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "logs/checkin.log")

DEBUG = True

# If enabled, the documents table is created on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
