from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import UNKNOWN_MARKER
from ..store.repository import Document

logger = logging.getLogger(__name__)

# Stored field name -> Person attribute.
STORED_FIELDS = {
    "name": "name",
    "email": "email",
    "subteam": "subteam",
    "grade": "grade",
    "studentId": "student_id",
}


@dataclass(frozen=True)
class Person:
    """Domain entity: someone on the roster.

    ``id`` is the stable identity used by attendance records; ``name`` is display
    only and may collide between people.
    """

    id: str
    name: str = ""
    email: str = ""
    subteam: str = ""
    grade: str = ""
    student_id: str = ""

    def to_fields(self) -> dict[str, str]:
        return {stored: getattr(self, attr) for stored, attr in STORED_FIELDS.items()}

    @classmethod
    def placeholder(cls, person_id: str) -> "Person":
        """Stand-in for an attendee whose roster entry no longer exists."""
        return cls(
            id=person_id,
            name=UNKNOWN_MARKER,
            email=person_id,
            subteam=UNKNOWN_MARKER,
            grade=UNKNOWN_MARKER,
            student_id=UNKNOWN_MARKER,
        )


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def decode_person(doc: Document) -> Person:
    """Build a Person from a stored document, defaulting anything missing to ''.

    Never raises: a malformed document still yields a Person keyed by the document key.
    """

    fields: Mapping[str, Any] = doc.fields if isinstance(doc.fields, Mapping) else {}
    values: dict[str, str] = {}
    missing: list[str] = []
    for stored, attr in STORED_FIELDS.items():
        text = _text(fields.get(stored))
        if text is None:
            missing.append(stored)
            text = ""
        values[attr] = text

    if missing and len(missing) < len(STORED_FIELDS):
        logger.debug("Person %s decoded with defaults for %s", doc.key, ", ".join(missing))
    elif missing:
        logger.warning("Person %s has no readable fields; keeping key only", doc.key)

    return Person(id=str(doc.key), **values)


def new_person(
    *,
    name: str,
    email: str = "",
    subteam: str = "",
    grade: str = "",
    student_id: str = "",
    person_id: Optional[str] = None,
) -> Person:
    """Create a Person, deriving an id from the e-mail when none is given."""
    if not person_id:
        person_id = email.strip().lower() if email and email.strip() else uuid.uuid4().hex
    return Person(
        id=person_id,
        name=name.strip(),
        email=email.strip(),
        subteam=subteam.strip(),
        grade=grade.strip(),
        student_id=student_id.strip(),
    )
