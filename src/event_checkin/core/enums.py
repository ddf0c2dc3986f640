from __future__ import annotations

from enum import Enum, IntEnum


class MatchClass(IntEnum):
    """Rank bucket of a search candidate (lower sorts first)."""

    NAME_PREFIX = 0
    EMAIL_PREFIX = 1
    SUBSTRING = 2


class LookupStatus(str, Enum):
    """Outcome of reading one attendance record."""

    FOUND = "FOUND"
    MISSING = "MISSING"
    FAILED = "FAILED"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
