from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..common.validators import normalize_query
from ..core.constants import DEFAULT_SHORTLIST_SIZE
from ..core.enums import MatchClass
from .model import Person


@dataclass(frozen=True)
class Candidate:
    person: Person
    match_class: MatchClass
    sort_key: tuple


def classify(query: str, person: Person) -> Optional[Candidate]:
    """Return the ranked candidate for ``person`` or None when it does not match.

    ``query`` must already be lower-cased.
    """

    name = person.name.lower()
    email = person.email.lower()
    student_id = person.student_id.lower()

    name_pos = name.find(query)
    email_prefix = email.startswith(query)
    if name_pos < 0 and query not in student_id and not email_prefix:
        return None

    if name_pos == 0:
        return Candidate(person, MatchClass.NAME_PREFIX, (MatchClass.NAME_PREFIX, name, person.name, person.id))
    if email_prefix:
        return Candidate(person, MatchClass.EMAIL_PREFIX, (MatchClass.EMAIL_PREFIX, email, person.email, person.id))

    # Student-id-only matches have no position in the name; they rank after every name hit.
    position = name_pos if name_pos >= 0 else len(name) + 1
    return Candidate(person, MatchClass.SUBSTRING, (MatchClass.SUBSTRING, position, name, person.name, person.id))


def rank(query: str, roster: Iterable[Person]) -> list[Candidate]:
    q = normalize_query(query)
    candidates = [c for c in (classify(q, p) for p in roster) if c is not None]
    candidates.sort(key=lambda c: c.sort_key)
    return candidates


def search(query: str, roster: Sequence[Person]) -> list[Person]:
    """Ordered matches for free-text ``query``; an empty query returns the roster as is."""
    if not normalize_query(query):
        return list(roster)
    return [c.person for c in rank(query, roster)]


def shortlist(query: str, roster: Sequence[Person], limit: int = DEFAULT_SHORTLIST_SIZE) -> list[Person]:
    """Top ``limit`` results; ranking always runs over the full candidate set first."""
    return search(query, roster)[: max(int(limit), 0)]
