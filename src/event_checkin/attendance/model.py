from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.constants import ATTENDEES_FIELD
from ..core.enums import LookupStatus
from ..store.repository import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: who checked in on one calendar day."""

    date_key: str
    created_at: datetime
    attendees: frozenset[str] = field(default_factory=frozenset)
    description: str = ""

    def has(self, person_id: str) -> bool:
        return person_id in self.attendees

    def sorted_attendees(self) -> list[str]:
        return sorted(self.attendees)

    @classmethod
    def empty(cls, date_key: str, *, now: datetime) -> "AttendanceRecord":
        return cls(date_key=date_key, created_at=now)


@dataclass(frozen=True)
class RecordLookup:
    """Result of reading one date: the record plus how it was obtained.

    MISSING and FAILED both carry an empty record so callers can render it directly.
    """

    record: AttendanceRecord
    status: LookupStatus

    @property
    def attendees(self) -> list[str]:
        return self.record.sorted_attendees()


def _from_epoch(seconds: Any) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(float(seconds))
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _decode_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch(value)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    if isinstance(value, Mapping) and "seconds" in value:
        # Firestore-style {"seconds": ..., "nanoseconds": ...}
        return _from_epoch(value["seconds"])
    return None


def _decode_attendees(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset({value})
    if not isinstance(value, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(str(item) for item in value if isinstance(item, (str, int)) and not isinstance(item, bool))


def decode_record(doc: Document, *, now: datetime) -> AttendanceRecord:
    """Every field is optional: attendees -> empty, date -> ``now``, description -> ''."""
    fields: Mapping[str, Any] = doc.fields if isinstance(doc.fields, Mapping) else {}

    created_at = _decode_timestamp(fields.get("date"))
    if created_at is None:
        logger.debug("Attendance %s has no usable date; using current time", doc.key)
        created_at = now

    if ATTENDEES_FIELD not in fields:
        logger.warning("Attendance %s has no %s field", doc.key, ATTENDEES_FIELD)

    description = fields.get("description")
    return AttendanceRecord(
        date_key=str(doc.key),
        created_at=created_at,
        attendees=_decode_attendees(fields.get(ATTENDEES_FIELD)),
        description=description if isinstance(description, str) else "",
    )
