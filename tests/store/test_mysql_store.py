"""MySQLDocumentStore against a fake connector (no server needed)."""

from __future__ import annotations

import asyncio
import json

import mysql.connector
import pytest

from event_checkin.core.exceptions import DocumentNotFoundError, StoreError
from event_checkin.database.mysql_base import load_fields
from event_checkin.store.mysql_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._result = []

    def execute(self, sql, params=()):
        sql = " ".join(sql.split())
        rows = self._db.rows
        if sql.startswith("SELECT doc_key, fields FROM documents WHERE collection=%s AND doc_key=%s"):
            col, key = params
            self._result = [{"doc_key": key, "fields": rows[(col, key)]}] if (col, key) in rows else []
        elif sql.startswith("SELECT doc_key, fields FROM documents WHERE collection=%s"):
            (col,) = params
            self._result = [{"doc_key": k, "fields": v} for (c, k), v in sorted(rows.items()) if c == col]
        elif sql.startswith("SELECT fields FROM documents"):
            col, key = params
            self._result = [{"fields": rows[(col, key)]}] if (col, key) in rows else []
        elif sql.startswith("INSERT IGNORE"):
            col, key, payload = params
            rows.setdefault((col, key), payload)
        elif sql.startswith("INSERT INTO documents"):
            col, key, payload = params
            rows[(col, key)] = payload
        elif sql.startswith("UPDATE documents"):
            payload, col, key = params
            rows[(col, key)] = payload
        elif sql.startswith("DELETE FROM documents"):
            rows.pop(tuple(params), None)
        else:
            raise AssertionError(f"unexpected SQL: {sql}")

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=True):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDatabase:
    database = "fake"

    def __init__(self, rows=None, *, down=False):
        self.rows = dict(rows or {})
        self.down = down
        self.commits = 0
        self.rollbacks = 0

    def connect(self):
        if self.down:
            raise mysql.connector.errors.InterfaceError("Can't connect to MySQL server")
        return FakeConnection(self)


def test_get_all_and_get_decode_json():
    db = FakeDatabase({("Users", "a"): json.dumps({"name": "A"}), ("Users", "b"): b'{"name": "B"}', ("Other", "c"): "{}"})
    store = MySQLDocumentStore(db)

    docs = asyncio.run(store.get_all("Users"))

    assert [(d.key, d.fields) for d in docs] == [("a", {"name": "A"}), ("b", {"name": "B"})]
    assert asyncio.run(store.get("Users", "missing")) is None


def test_update_union_upserts_and_merges():
    db = FakeDatabase()
    store = MySQLDocumentStore(db)

    asyncio.run(store.update_union("Attendance", "2024-01-01", "attendees", ["a"], defaults={"date": "t"}))
    asyncio.run(store.update_union("Attendance", "2024-01-01", "attendees", ["a", "b"], defaults={"date": "t2"}))

    assert json.loads(db.rows[("Attendance", "2024-01-01")]) == {"date": "t", "attendees": ["a", "b"]}


def test_update_union_without_defaults_on_missing_document():
    store = MySQLDocumentStore(FakeDatabase())

    with pytest.raises(DocumentNotFoundError):
        asyncio.run(store.update_union("Attendance", "x", "attendees", ["a"]))


def test_driver_errors_become_store_errors():
    store = MySQLDocumentStore(FakeDatabase(down=True))

    with pytest.raises(StoreError):
        asyncio.run(store.get_all("Users"))


def test_corrupt_json_loads_as_empty():
    assert load_fields("{not json") == {}
    assert load_fields("[1, 2]") == {}
    assert load_fields(None) == {}
