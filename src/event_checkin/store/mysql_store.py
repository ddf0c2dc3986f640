from __future__ import annotations

import asyncio
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, TypeVar

import mysql.connector

from ..core.exceptions import DocumentNotFoundError, StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_fields, fetchall, fetchone, load_fields
from .repository import Document, DocumentStore, merge_union


T = TypeVar("T")


class MySQLDocumentStore(DocumentStore):
    """Document collections kept as JSON rows in one MySQL table.

    The connector is blocking, so every call runs on a worker thread.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    async def _run(self, op: Callable[[], T], *, what: str) -> T:
        try:
            return await asyncio.to_thread(op)
        except mysql.connector.Error as exc:
            raise StoreError(f"{what} failed: {exc}") from exc

    async def get_all(self, collection: str) -> Sequence[Document]:
        def op() -> list[Document]:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_key, fields FROM documents WHERE collection=%s ORDER BY doc_key",
                    (collection,),
                )
                return [Document(key=str(r["doc_key"]), fields=load_fields(r.get("fields"))) for r in fetchall(cur)]

        return await self._run(op, what=f"list {collection}")

    async def get(self, collection: str, key: str) -> Optional[Document]:
        def op() -> Optional[Document]:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_key, fields FROM documents WHERE collection=%s AND doc_key=%s",
                    (collection, key),
                )
                row = fetchone(cur)
                if not row:
                    return None
                return Document(key=str(row["doc_key"]), fields=load_fields(row.get("fields")))

        return await self._run(op, what=f"get {collection}/{key}")

    async def set(self, collection: str, key: str, fields: Mapping[str, Any]) -> None:
        payload = dump_fields(fields)

        def op() -> None:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO documents(collection, doc_key, fields)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE fields=VALUES(fields)
                    """,
                    (collection, key, payload),
                )

        await self._run(op, what=f"set {collection}/{key}")

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

        def op() -> None:
            with db_cursor(self._conn_factory) as (_, cur):
                if defaults is not None:
                    # Creates the row if absent; a no-op when another writer got there first.
                    cur.execute(
                        "INSERT IGNORE INTO documents(collection, doc_key, fields) VALUES(%s,%s,%s)",
                        (collection, key, dump_fields({**defaults, field_name: []})),
                    )
                cur.execute(
                    "SELECT fields FROM documents WHERE collection=%s AND doc_key=%s FOR UPDATE",
                    (collection, key),
                )
                row = fetchone(cur)
                if not row:
                    raise DocumentNotFoundError(collection, key)
                fields = load_fields(row.get("fields"))
                fields[field_name] = merge_union(fields.get(field_name), values)
                cur.execute(
                    "UPDATE documents SET fields=%s WHERE collection=%s AND doc_key=%s",
                    (dump_fields(fields), collection, key),
                )

        await self._run(op, what=f"union {collection}/{key}.{field_name}")

    async def delete(self, collection: str, key: str) -> None:
        def op() -> None:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM documents WHERE collection=%s AND doc_key=%s", (collection, key))

        await self._run(op, what=f"delete {collection}/{key}")
