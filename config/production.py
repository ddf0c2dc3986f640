import os

from .config import DB_CONFIG, Config

STORE_BACKEND = Config.STORE_BACKEND
DB_CONFIG = DB_CONFIG

USERS_COLLECTION = Config.USERS_COLLECTION
ATTENDANCE_COLLECTION = Config.ATTENDANCE_COLLECTION
ENTRIES_COLLECTION = Config.ENTRIES_COLLECTION
SHORTLIST_SIZE = Config.SHORTLIST_SIZE
PRESENT_MARK = Config.PRESENT_MARK
ABSENT_MARK = Config.ABSENT_MARK

LOG_LEVEL = Config.LOG_LEVEL
LOG_FILE = os.getenv("LOG_FILE", "logs/checkin.log")

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
