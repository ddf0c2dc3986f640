from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Optional

from .attendance.ledger import AttendanceLedger
from .core.constants import (
    ABSENT_MARK,
    ATTENDANCE_COLLECTION,
    DEFAULT_SHORTLIST_SIZE,
    ENTRIES_COLLECTION,
    PRESENT_MARK,
    USERS_COLLECTION,
)
from .core.enums import StoreBackend
from .entries.service import EntryLog
from .export.service import ExportService
from .roster.cache import RosterCache
from .store.memory_store import InMemoryDocumentStore
from .store.repository import DocumentStore


@dataclass(frozen=True)
class Container:
    store: DocumentStore

    roster: RosterCache
    ledger: AttendanceLedger
    export_service: ExportService
    entry_log: EntryLog


def build_store(settings: ModuleType | Any) -> DocumentStore:
    backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", StoreBackend.MEMORY.value)).lower())
    if backend == StoreBackend.MEMORY:
        return InMemoryDocumentStore(getattr(settings, "SEED_DATA", None))

    # Imported lazily so the memory backend works without a MySQL driver configured.
    from .database.bootstrap import apply_schema
    from .database.connection import DBConfig, DatabaseConnection
    from .store.mysql_store import MySQLDocumentStore

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn)
    return MySQLDocumentStore(conn)


def build_container(settings: ModuleType | Any, *, store: Optional[DocumentStore] = None) -> Container:
    store = store or build_store(settings)

    roster = RosterCache(
        store,
        collection=getattr(settings, "USERS_COLLECTION", USERS_COLLECTION),
        shortlist_size=int(getattr(settings, "SHORTLIST_SIZE", DEFAULT_SHORTLIST_SIZE)),
    )
    ledger = AttendanceLedger(
        store,
        roster,
        collection=getattr(settings, "ATTENDANCE_COLLECTION", ATTENDANCE_COLLECTION),
    )
    export_service = ExportService(
        roster,
        ledger,
        present_mark=getattr(settings, "PRESENT_MARK", PRESENT_MARK),
        absent_mark=getattr(settings, "ABSENT_MARK", ABSENT_MARK),
    )
    entry_log = EntryLog(store, collection=getattr(settings, "ENTRIES_COLLECTION", ENTRIES_COLLECTION))

    return Container(
        store=store,
        roster=roster,
        ledger=ledger,
        export_service=export_service,
        entry_log=entry_log,
    )
