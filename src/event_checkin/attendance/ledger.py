from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import date_key, now_local
from ..common.validators import require_non_empty
from ..core.constants import ATTENDANCE_COLLECTION, ATTENDEES_FIELD
from ..core.enums import LookupStatus
from ..core.exceptions import StoreError, ValidationError
from ..roster.cache import RosterCache
from ..roster.model import Person, decode_person
from ..store.repository import DocumentStore
from .model import AttendanceRecord, RecordLookup, decode_record

logger = logging.getLogger(__name__)

CheckInListener = Callable[[Person, str], None]


class AttendanceLedger:
    """Per-day attendance records with add-to-set check-in.

    Check-in only ever unions an id into the day's attendee list, so repeated or
    concurrent check-ins converge to the same set regardless of order.
    """

    def __init__(
        self,
        store: DocumentStore,
        roster: RosterCache,
        *,
        collection: str = ATTENDANCE_COLLECTION,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._roster = roster
        self._collection = collection
        self._clock = clock
        self._listeners: list[CheckInListener] = []

    def on_check_in(self, listener: CheckInListener) -> None:
        self._listeners.append(listener)

    def _key_for(self, day: date | datetime | str | None) -> str:
        if day is None:
            return date_key(self._clock())
        if isinstance(day, str):
            return require_non_empty(day, "Date")
        return date_key(day)

    async def resolve_person(self, person_id: str) -> Optional[Person]:
        """Look a person up by stable id: roster snapshot first, then the store."""
        person = self._roster.get_by_id(person_id)
        if person is not None:
            return person
        doc = await self._store.get(self._roster.collection, person_id)
        return decode_person(doc) if doc is not None else None

    async def check_in(self, person_id: str, today: date | datetime | str | None = None) -> Person:
        person_id = require_non_empty(person_id, "Person id")
        key = self._key_for(today)

        person = await self.resolve_person(person_id)
        if person is None:
            raise ValidationError(f"Person {person_id!r} is not on the roster")

        try:
            await self._store.update_union(
                self._collection,
                key,
                ATTENDEES_FIELD,
                [person_id],
                defaults={"date": self._clock()},
            )
        except StoreError as exc:
            logger.error("Check-in of %s on %s failed: %s", person_id, key, exc)
            raise

        logger.info("Checked in %s (%s) on %s", person.name, person_id, key)
        for listener in list(self._listeners):
            try:
                listener(person, key)
            except Exception:
                logger.exception("Check-in listener %r failed", listener)
        return person

    async def fetch_for_date(self, day: date | datetime | str) -> RecordLookup:
        key = self._key_for(day)
        now = self._clock()
        try:
            doc = await self._store.get(self._collection, key)
        except StoreError as exc:
            logger.error("Reading attendance for %s failed: %s", key, exc)
            return RecordLookup(AttendanceRecord.empty(key, now=now), LookupStatus.FAILED)

        if doc is None:
            return RecordLookup(AttendanceRecord.empty(key, now=now), LookupStatus.MISSING)
        return RecordLookup(decode_record(doc, now=now), LookupStatus.FOUND)

    async def list_dates(self, *, newest_first: bool = True) -> list[str]:
        """All record keys. Raises StoreError when the listing itself fails."""
        docs = await self._store.get_all(self._collection)
        return sorted((str(doc.key) for doc in docs), reverse=newest_first)

    async def default_date(self) -> Optional[str]:
        dates = await self.list_dates(newest_first=True)
        return dates[0] if dates else None

    async def fetch_all(self) -> dict[str, AttendanceRecord]:
        """Complete snapshot of every record, keyed by date."""
        docs = await self._store.get_all(self._collection)
        now = self._clock()
        return {str(doc.key): decode_record(doc, now=now) for doc in docs}

    async def _person_or_placeholder(self, person_id: str) -> Person:
        try:
            doc = await self._store.get(self._roster.collection, person_id)
        except StoreError as exc:
            logger.warning("Looking up attendee %s failed: %s", person_id, exc)
            doc = None
        return decode_person(doc) if doc is not None else Person.placeholder(person_id)

    async def attendee_details(self, day: date | datetime | str) -> list[Person]:
        """Full Person for every attendee of ``day``, in attendee id order.

        One lookup per id runs concurrently; the result is only produced once all
        of them finished. Unknown or unreadable ids become placeholders.
        """

        lookup = await self.fetch_for_date(day)
        ids = lookup.attendees
        if not ids:
            return []
        return list(await asyncio.gather(*(self._person_or_placeholder(pid) for pid in ids)))
