from __future__ import annotations

from datetime import datetime

import pytest

from event_checkin.attendance.ledger import AttendanceLedger
from event_checkin.roster.cache import RosterCache
from event_checkin.store.memory_store import InMemoryDocumentStore

ROSTER_SEED = {
    "Users": {
        "ann@x.com": {"name": "Ann Lee", "email": "ann@x.com", "subteam": "Build", "grade": "11", "studentId": "1001"},
        "b@x.com": {"name": "Benny Ann", "email": "b@x.com", "subteam": "Code", "grade": "10", "studentId": "1002"},
        "cara@x.com": {"name": "Cara Diaz", "email": "cara@x.com", "subteam": "Build", "grade": "12", "studentId": "2001"},
    }
}


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 2, 9, 15, 0)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(ROSTER_SEED)


@pytest.fixture
def roster(store) -> RosterCache:
    return RosterCache(store)


@pytest.fixture
def ledger(store, roster, fixed_now) -> AttendanceLedger:
    return AttendanceLedger(store, roster, clock=lambda: fixed_now)


@pytest.fixture
def roster_seed() -> dict:
    return ROSTER_SEED
