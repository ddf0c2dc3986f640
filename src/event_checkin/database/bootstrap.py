from __future__ import annotations

import logging

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS documents (
        collection VARCHAR(64) NOT NULL,
        doc_key VARCHAR(255) NOT NULL,
        fields JSON NOT NULL,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
        PRIMARY KEY (collection, doc_key)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """,
)


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create the documents table if missing (idempotent)."""
    with db_cursor(conn_factory) as (_, cur):
        for statement in SCHEMA_STATEMENTS:
            cur.execute(statement)
    logger.info("Schema ready on %s", conn_factory.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [str(row[0]) for row in fetchall(cur)]
