from __future__ import annotations

import csv
import io
import logging
import uuid
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, title_case
from ..core.constants import ENTRIES_COLLECTION
from ..core.exceptions import ValidationError
from ..store.repository import DocumentStore
from .model import Entry, decode_entry

logger = logging.getLogger(__name__)


class EntryLog:
    """Use case: walk-in log kept next to the roster-based attendance."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        collection: str = ENTRIES_COLLECTION,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._collection = collection
        self._clock = clock

    async def add(self, name: str) -> Entry:
        name = title_case(require_non_empty(name, "Name"))
        entry = Entry(entry_id=uuid.uuid4().hex, name=name, created_at=self._clock())
        await self._store.set(self._collection, entry.entry_id, entry.to_fields())
        logger.info("Walk-in entry added: %s", name)
        return entry

    async def list(self) -> list[Entry]:
        now = self._clock()
        docs = await self._store.get_all(self._collection)
        entries = [decode_entry(doc, now=now) for doc in docs]
        entries.sort(key=lambda e: (e.created_at, e.entry_id))
        return entries

    async def rename(self, entry_id: str, name: str) -> Entry:
        name = require_non_empty(name, "Name")
        doc = await self._store.get(self._collection, entry_id)
        if doc is None:
            raise ValidationError(f"Entry {entry_id!r} does not exist")
        current = decode_entry(doc, now=self._clock())
        updated = Entry(entry_id=current.entry_id, name=name, created_at=current.created_at)
        await self._store.set(self._collection, entry_id, updated.to_fields())
        return updated

    async def delete(self, entry_id: str) -> None:
        await self._store.delete(self._collection, require_non_empty(entry_id, "Entry id"))

    async def clear(self) -> int:
        docs = await self._store.get_all(self._collection)
        for doc in docs:
            await self._store.delete(self._collection, doc.key)
        logger.info("Cleared %d walk-in entries", len(docs))
        return len(docs)

    async def export_csv(self) -> str:
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(["Name", "Date"])
        for entry in await self.list():
            writer.writerow([entry.name, entry.formatted_date])
        return out.getvalue()
