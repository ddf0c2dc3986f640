from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import try_parse_date
from ..roster.model import Person

_FIXED_WIDTH_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class PresenceMatrix:
    """People x dates grid; ``cells[i][j]`` is True when people[i] attended dates[j]."""

    people: tuple[Person, ...]
    dates: tuple[str, ...]
    cells: tuple[tuple[bool, ...], ...]

    def is_present(self, person_id: str, day: str) -> bool:
        for row, person in enumerate(self.people):
            if person.id == person_id and day in self.dates:
                return self.cells[row][self.dates.index(day)]
        return False

    def attendance_count(self, person_id: str) -> int:
        for row, person in enumerate(self.people):
            if person.id == person_id:
                return sum(self.cells[row])
        return 0


def sort_dates(keys: Iterable[str]) -> list[str]:
    """Ascending dates. Plain string order only when every key is YYYY-MM-DD."""
    keys = list(keys)
    if all(_FIXED_WIDTH_DATE.match(k) for k in keys):
        return sorted(keys)

    def key(value: str) -> tuple[int, date, str]:
        parsed = try_parse_date(value)
        # Unparseable keys go last, in plain string order.
        return (0, parsed, value) if parsed else (1, date.min, value)

    return sorted(keys, key=key)


def sort_people(roster: Iterable[Person]) -> list[Person]:
    return sorted(roster, key=lambda p: (p.name.lower(), p.name, p.id))


def build_matrix(roster: Sequence[Person], records: Mapping[str, AttendanceRecord]) -> PresenceMatrix:
    people = tuple(sort_people(roster))
    dates = tuple(sort_dates(records.keys()))
    cells = tuple(tuple(records[d].has(person.id) for d in dates) for person in people)
    return PresenceMatrix(people=people, dates=dates, cells=cells)
