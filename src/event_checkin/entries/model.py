from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from ..common.datetime_utils import format_entry_time
from ..store.repository import Document


@dataclass(frozen=True)
class Entry:
    """A free-typed walk-in check-in for someone not on the roster."""

    entry_id: str
    name: str
    created_at: datetime

    @property
    def formatted_date(self) -> str:
        return format_entry_time(self.created_at)

    def to_fields(self) -> dict[str, Any]:
        return {"name": self.name, "date": self.created_at}


def decode_entry(doc: Document, *, now: datetime) -> Entry:
    fields: Mapping[str, Any] = doc.fields if isinstance(doc.fields, Mapping) else {}
    created_at = fields.get("date")
    if isinstance(created_at, str):
        try:
            created_at = datetime.fromisoformat(created_at)
        except ValueError:
            created_at = None
    if not isinstance(created_at, datetime):
        created_at = now
    name = fields.get("name")
    return Entry(entry_id=str(doc.key), name=name if isinstance(name, str) else "", created_at=created_at)
