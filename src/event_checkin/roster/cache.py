from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import USERS_COLLECTION
from ..core.exceptions import StoreError
from ..store.repository import DocumentStore
from .model import Person, decode_person
from .search import shortlist

logger = logging.getLogger(__name__)

RosterListener = Callable[[Sequence[Person]], None]


class RosterCache:
    """In-memory mirror of the remote Users collection.

    The snapshot is an immutable tuple replaced in a single assignment, so readers
    (ranking, export) never observe a half-updated roster. Writes go to the remote
    store first and are followed by a full ``refresh()``.
    """

    def __init__(self, store: DocumentStore, *, collection: str = USERS_COLLECTION, shortlist_size: int = 5):
        self._store = store
        self._collection = collection
        self._shortlist_size = int(shortlist_size)
        self._snapshot: tuple[Person, ...] = ()
        self._by_id: dict[str, Person] = {}
        self._listeners: list[RosterListener] = []

    @property
    def collection(self) -> str:
        return self._collection

    def get(self) -> tuple[Person, ...]:
        return self._snapshot

    def get_by_id(self, person_id: str) -> Optional[Person]:
        return self._by_id.get(person_id)

    def subscribe(self, listener: RosterListener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def search(self, query: str, *, limit: Optional[int] = None) -> list[Person]:
        return shortlist(query, self._snapshot, self._shortlist_size if limit is None else limit)

    async def refresh(self) -> bool:
        """Re-read the whole collection. Returns False (cache unchanged) on remote failure."""
        try:
            docs = await self._store.get_all(self._collection)
        except StoreError as exc:
            logger.error("Roster refresh from %s failed: %s", self._collection, exc)
            return False

        people = tuple(decode_person(doc) for doc in docs)
        self._publish(people)
        logger.info("Roster refreshed: %d people", len(people))
        return True

    def _publish(self, people: tuple[Person, ...]) -> None:
        by_id = {p.id: p for p in people}
        self._snapshot, self._by_id = people, by_id
        for listener in list(self._listeners):
            try:
                listener(people)
            except Exception:
                logger.exception("Roster listener %r failed", listener)

    async def add(self, person: Person) -> bool:
        return await self._write(person, action="add")

    async def update(self, person: Person) -> bool:
        return await self._write(person, action="update")

    async def delete(self, person: Person | str) -> bool:
        person_id = person if isinstance(person, str) else person.id
        person_id = require_non_empty(person_id, "Person id")
        try:
            await self._store.delete(self._collection, person_id)
        except StoreError as exc:
            logger.error("Deleting person %s failed: %s", person_id, exc)
            return False
        await self.refresh()
        return True

    async def _write(self, person: Person, *, action: str) -> bool:
        require_non_empty(person.id, "Person id")
        require_non_empty(person.name, "Name")
        try:
            await self._store.set(self._collection, person.id, person.to_fields())
        except StoreError as exc:
            logger.error("Failed to %s person %s: %s", action, person.id, exc)
            return False
        await self.refresh()
        return True
