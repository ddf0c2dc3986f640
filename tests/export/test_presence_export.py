from __future__ import annotations

import asyncio
from datetime import datetime

from event_checkin.attendance.ledger import AttendanceLedger
from event_checkin.attendance.model import AttendanceRecord
from event_checkin.export.csv_writer import serialize_csv
from event_checkin.export.matrix import build_matrix, sort_dates
from event_checkin.export.service import ExportService
from event_checkin.roster.cache import RosterCache
from event_checkin.roster.model import Person
from event_checkin.store.memory_store import InMemoryDocumentStore

NOW = datetime(2024, 1, 3, 10, 0)

A = Person(id="a@x.com", name="Alice", email="a@x.com", student_id="1")
B = Person(id="b@x.com", name="Bob", email="b@x.com", student_id="2")


def _record(key, *ids):
    return AttendanceRecord(date_key=key, created_at=NOW, attendees=frozenset(ids))


def test_matrix_and_csv_for_two_days():
    records = {"2024-01-02": _record("2024-01-02", A.id, B.id), "2024-01-01": _record("2024-01-01", A.id)}

    matrix = build_matrix([B, A], records)
    text = serialize_csv(matrix)

    assert text.splitlines() == [
        "Name,Email,StudentID,2024-01-01,2024-01-02",
        "Alice,a@x.com,1,✓,✓",
        "Bob,b@x.com,2,✗,✓",
    ]
    assert text.endswith("\n")
    assert matrix.is_present(B.id, "2024-01-01") is False
    assert matrix.attendance_count(A.id) == 2


def test_rows_sorted_by_name_regardless_of_roster_order():
    roster = [Person(id="3", name="carl"), Person(id="1", name="Anna"), Person(id="2", name="Beth")]

    matrix = build_matrix(roster, {})

    assert [p.name for p in matrix.people] == ["Anna", "Beth", "carl"]
    assert serialize_csv(matrix).splitlines()[0] == "Name,Email,StudentID"


def test_same_name_people_are_kept_apart_by_id():
    twin_a = Person(id="1", name="Sam Lee")
    twin_b = Person(id="2", name="Sam Lee")

    matrix = build_matrix([twin_b, twin_a], {"2024-01-01": _record("2024-01-01", "2")})

    assert matrix.is_present("2", "2024-01-01") is True
    assert matrix.is_present("1", "2024-01-01") is False


def test_fields_with_commas_are_quoted():
    person = Person(id="x", name="Lee, Ann", email="ann@x.com", student_id="9")

    text = serialize_csv(build_matrix([person], {"2024-01-01": _record("2024-01-01", "x")}))

    assert text.splitlines()[1] == '"Lee, Ann",ann@x.com,9,✓'


def test_custom_markers():
    text = serialize_csv(build_matrix([A], {"2024-01-01": _record("2024-01-01")}), present="Y", absent="N")

    assert text.splitlines()[1] == "Alice,a@x.com,1,N"


def test_sort_dates_falls_back_to_parsed_order():
    assert sort_dates(["2024-01-10", "2024-01-02"]) == ["2024-01-02", "2024-01-10"]
    assert sort_dates(["1/10/2024", "12/31/2023", "2024-01-02", "misc"]) == [
        "12/31/2023",
        "2024-01-02",
        "1/10/2024",
        "misc",
    ]


def test_export_service_reads_full_ledger(tmp_path):
    store = InMemoryDocumentStore(
        {
            "Users": {A.id: A.to_fields(), B.id: B.to_fields()},
            "Attendance": {"2024-01-01": {"attendees": [A.id]}, "2024-01-02": {"attendees": [A.id, B.id]}},
        }
    )
    roster = RosterCache(store)
    service = ExportService(roster, AttendanceLedger(store, roster, clock=lambda: NOW))
    asyncio.run(roster.refresh())

    path = asyncio.run(service.write_csv(tmp_path / "out.csv"))

    assert path.read_text(encoding="utf-8").splitlines() == [
        "Name,Email,StudentID,2024-01-01,2024-01-02",
        "Alice,a@x.com,1,✓,✓",
        "Bob,b@x.com,2,✗,✓",
    ]


def test_unknown_date_is_not_present():
    matrix = build_matrix([A], {"2024-01-01": _record("2024-01-01", A.id)})

    assert matrix.is_present(A.id, "2030-01-01") is False


def test_export_survives_record_with_corrupt_timestamp():
    store = InMemoryDocumentStore(
        {
            "Users": {A.id: A.to_fields()},
            "Attendance": {
                "2024-01-01": {"date": float("nan"), "attendees": [A.id]},
                "2024-01-02": {"date": {"seconds": 1e20}, "attendees": []},
            },
        }
    )
    roster = RosterCache(store)
    service = ExportService(roster, AttendanceLedger(store, roster, clock=lambda: NOW))
    asyncio.run(roster.refresh())

    assert asyncio.run(service.export_csv()).splitlines() == [
        "Name,Email,StudentID,2024-01-01,2024-01-02",
        "Alice,a@x.com,1,✓,✗",
    ]
