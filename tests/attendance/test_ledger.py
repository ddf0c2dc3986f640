from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from event_checkin.attendance.ledger import AttendanceLedger
from event_checkin.core.enums import LookupStatus
from event_checkin.core.exceptions import StoreError, ValidationError
from event_checkin.roster.cache import RosterCache
from event_checkin.roster.model import Person
from event_checkin.store.memory_store import InMemoryDocumentStore


class BrokenReadStore(InMemoryDocumentStore):
    def __init__(self, data=None, *, broken_keys=()):
        super().__init__(data)
        self.broken_keys = set(broken_keys)

    async def get(self, collection, key):
        if key in self.broken_keys:
            raise StoreError("connection reset")
        return await super().get(collection, key)

def test_first_check_in_creates_record(ledger, store, fixed_now):
    asyncio.run(ledger.check_in("ann@x.com"))

    doc = store.snapshot("Attendance")["2024-01-02"]
    assert doc["attendees"] == ["ann@x.com"]
    assert doc["date"] == fixed_now

def test_check_in_is_idempotent(ledger, store):
    asyncio.run(ledger.check_in("ann@x.com"))
    asyncio.run(ledger.check_in("ann@x.com"))

    assert store.snapshot("Attendance")["2024-01-02"]["attendees"] == ["ann@x.com"]

def test_concurrent_check_ins_are_both_kept(roster_seed, fixed_now):
    store = InMemoryDocumentStore(roster_seed, latency=0.01)
    ledger = AttendanceLedger(store, RosterCache(store), clock=lambda: fixed_now)

    async def both():
        await asyncio.gather(ledger.check_in("ann@x.com"), ledger.check_in("b@x.com"))

    asyncio.run(both())

    assert sorted(store.snapshot("Attendance")["2024-01-02"]["attendees"]) == ["ann@x.com", "b@x.com"]

def test_check_in_explicit_day(ledger, store):
    asyncio.run(ledger.check_in("b@x.com", datetime(2024, 3, 9, 18, 0)))

    assert "2024-03-09" in store.snapshot("Attendance")

def test_check_in_resolves_by_id_and_returns_person(ledger):
    person = asyncio.run(ledger.check_in("b@x.com"))

    assert person.name == "Benny Ann"

def test_check_in_unknown_person_raises(ledger, store):
    with pytest.raises(ValidationError):
        asyncio.run(ledger.check_in("nobody@x.com"))

    assert store.snapshot("Attendance") == {}

def test_check_in_notifies_listeners(ledger):
    seen = []
    ledger.on_check_in(lambda person, key: seen.append((person.id, key)))

    asyncio.run(ledger.check_in("cara@x.com"))

    assert seen == [("cara@x.com", "2024-01-02")]

def test_fetch_for_date_found_missing_and_failed(roster_seed, fixed_now):
    store = BrokenReadStore(
        {**roster_seed, "Attendance": {"2024-01-01": {"attendees": ["ann@x.com"]}, "2024-01-05": {}}},
        broken_keys={"2024-01-05"},
    )
    ledger = AttendanceLedger(store, RosterCache(store), clock=lambda: fixed_now)

    found = asyncio.run(ledger.fetch_for_date("2024-01-01"))
    missing = asyncio.run(ledger.fetch_for_date("2023-12-31"))
    failed = asyncio.run(ledger.fetch_for_date("2024-01-05"))

    assert found.status == LookupStatus.FOUND and found.attendees == ["ann@x.com"]
    assert missing.status == LookupStatus.MISSING and missing.attendees == []
    assert failed.status == LookupStatus.FAILED and failed.attendees == []

def test_list_dates_and_default(store, roster, fixed_now):
    asyncio.run(store.set("Attendance", "2024-01-01", {"attendees": []}))
    asyncio.run(store.set("Attendance", "2024-02-10", {"attendees": []}))
    asyncio.run(store.set("Attendance", "2023-12-31", {"attendees": []}))
    ledger = AttendanceLedger(store, roster, clock=lambda: fixed_now)

    assert asyncio.run(ledger.list_dates()) == ["2024-02-10", "2024-01-01", "2023-12-31"]
    assert asyncio.run(ledger.list_dates(newest_first=False)) == ["2023-12-31", "2024-01-01", "2024-02-10"]
    assert asyncio.run(ledger.default_date()) == "2024-02-10"

def test_default_date_none_without_records(ledger):
    assert asyncio.run(ledger.default_date()) is None

def test_attendee_details_uses_placeholder_for_unknown(store, ledger):
    asyncio.run(store.set("Attendance", "2024-01-01", {"attendees": ["ann@x.com", "ghost@x.com"]}))

    people = asyncio.run(ledger.attendee_details("2024-01-01"))

    assert [p.id for p in people] == ["ann@x.com", "ghost@x.com"]
    assert people[0].name == "Ann Lee"
    ghost = people[1]
    assert ghost == Person(
        id="ghost@x.com", name="Unknown", email="ghost@x.com", subteam="Unknown", grade="Unknown", student_id="Unknown"
    )

def test_attendee_details_degrades_failed_lookups(roster_seed, fixed_now):
    store = BrokenReadStore(
        {**roster_seed, "Attendance": {"2024-01-01": {"attendees": ["ann@x.com", "b@x.com"]}}},
        broken_keys={"b@x.com"},
    )
    ledger = AttendanceLedger(store, RosterCache(store), clock=lambda: fixed_now)

    people = asyncio.run(ledger.attendee_details("2024-01-01"))

    assert [p.name for p in people] == ["Ann Lee", "Unknown"]

def test_attendee_details_empty_for_missing_date(ledger):
    assert asyncio.run(ledger.attendee_details("1999-01-01")) == []

def test_fetch_all_returns_complete_snapshot(store, ledger):
    asyncio.run(ledger.check_in("ann@x.com", "2024-01-01"))
    asyncio.run(ledger.check_in("b@x.com", "2024-01-02"))
    asyncio.run(ledger.check_in("ann@x.com", "2024-01-02"))

    records = asyncio.run(ledger.fetch_all())

    assert set(records) == {"2024-01-01", "2024-01-02"}
    assert records["2024-01-02"].attendees == frozenset({"ann@x.com", "b@x.com"})


def test_failing_listener_does_not_fail_check_in(ledger, store):
    def explode(person, key):
        raise RuntimeError("display went away")

    seen = []
    ledger.on_check_in(explode)
    ledger.on_check_in(lambda person, key: seen.append(person.id))

    person = asyncio.run(ledger.check_in("ann@x.com"))

    assert person.id == "ann@x.com"
    assert seen == ["ann@x.com"]
    assert store.snapshot("Attendance")["2024-01-02"]["attendees"] == ["ann@x.com"]


def test_fetch_for_date_with_corrupt_timestamp(store, ledger, fixed_now):
    asyncio.run(store.set("Attendance", "2024-01-01", {"date": 1e20, "attendees": ["ann@x.com"]}))

    lookup = asyncio.run(ledger.fetch_for_date("2024-01-01"))

    assert lookup.status == LookupStatus.FOUND
    assert lookup.attendees == ["ann@x.com"]
    assert lookup.record.created_at == fixed_now
