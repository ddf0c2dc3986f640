from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence


@dataclass(frozen=True)
class Document:
    """One stored document: its key inside a collection plus its raw fields."""

    key: str
    fields: Mapping[str, Any] = field(default_factory=dict)


class DocumentStore(Protocol):
    """Key-value document service (remote, eventually consistent).

    Note (DIP): services depend on this interface, never on a concrete backend.
    Every method is a coroutine so callers can fan out reads without blocking.
    """

    async def get_all(self, collection: str) -> Sequence[Document]:
        raise NotImplementedError

    async def get(self, collection: str, key: str) -> Optional[Document]:
        raise NotImplementedError

    async def set(self, collection: str, key: str, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    async def update_union(
        self,
        collection: str,
        key: str,
        field_name: str,
        values: Iterable[str],
        *,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Add ``values`` to the list under ``field_name`` without duplicates.

        A missing document is created from ``defaults`` when given, otherwise
        DocumentNotFoundError is raised.
        """

        raise NotImplementedError

    async def delete(self, collection: str, key: str) -> None:
        raise NotImplementedError


def merge_union(existing: Any, values: Iterable[Any]) -> list[str]:
    """Union of a stored list and new values as strings, keeping first-seen order."""
    merged: list[str] = []
    seen: set[str] = set()
    current = existing if isinstance(existing, (list, tuple)) else []
    for item in (str(v) for v in [*current, *values]):
        if item in seen:
            continue
        seen.add(item)
        merged.append(item)
    return merged
