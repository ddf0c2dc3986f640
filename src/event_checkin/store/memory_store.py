from __future__ import annotations

import asyncio
import copy
import threading
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.exceptions import DocumentNotFoundError
from .repository import Document, DocumentStore, merge_union


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store used for development and tests.

    ``latency`` (seconds) is awaited before every operation to mimic a network hop,
    which lets concurrent callers interleave the way they would against a remote store.
    """

    def __init__(self, data: Optional[Mapping[str, Mapping[str, Mapping[str, Any]]]] = None, *, latency: float = 0.0):
        self._data: dict[str, dict[str, dict[str, Any]]] = {
            collection: {key: dict(fields) for key, fields in docs.items()}
            for collection, docs in (data or {}).items()
        }
        self._lock = threading.Lock()
        self._latency = float(latency)

    async def _hop(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)

    async def get_all(self, collection: str) -> Sequence[Document]:
        await self._hop()
        with self._lock:
            docs = self._data.get(collection, {})
            return [Document(key=key, fields=copy.deepcopy(fields)) for key, fields in docs.items()]

    async def get(self, collection: str, key: str) -> Optional[Document]:
        await self._hop()
        with self._lock:
            fields = self._data.get(collection, {}).get(key)
            if fields is None:
                return None
            return Document(key=key, fields=copy.deepcopy(fields))

    async def set(self, collection: str, key: str, fields: Mapping[str, Any]) -> None:
        await self._hop()
        with self._lock:
            self._data.setdefault(collection, {})[key] = copy.deepcopy(dict(fields))

    async def update_union(
        self,
        collection: str,
        key: str,
        field_name: str,
        values: Iterable[str],
        *,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        values = list(values)
        await self._hop()
        with self._lock:
            docs = self._data.setdefault(collection, {})
            current = docs.get(key)
            if current is None:
                if defaults is None:
                    raise DocumentNotFoundError(collection, key)
                current = copy.deepcopy(dict(defaults))
                docs[key] = current
            current[field_name] = merge_union(current.get(field_name), values)

    async def delete(self, collection: str, key: str) -> None:
        await self._hop()
        with self._lock:
            self._data.get(collection, {}).pop(key, None)

    def snapshot(self, collection: str) -> dict[str, dict[str, Any]]:
        """Synchronous copy of a collection, for seeding checks and debugging."""
        with self._lock:
            return copy.deepcopy(self._data.get(collection, {}))
