"""
store.py - Keymapp store access.

KeymappStore owns the single connection of a sync run. The module-level
functions hold the individual statements so they can be used against
any open connection.
"""

import logging
import sqlite3

from keymapp_sync.db.connection import create_connection
from keymapp_sync.db.migrations import initialize_schema, seed_default_config
from keymapp_sync.errors import StoreError

logger = logging.getLogger("keymapp_sync.db")

_UPSERT_REVISION_SQL = """
INSERT INTO revision (revisionId, data) VALUES (?, ?)
ON CONFLICT (revisionId) DO UPDATE SET data = excluded.data
"""


def metadata_count(conn: sqlite3.Connection) -> int:
    """Return the number of rows in the metadata table."""
    try:
        return conn.execute("SELECT count(*) FROM metadata").fetchone()[0]
    except sqlite3.Error as e:
        raise StoreError(
            f"Failed to count metadata rows: {e}",
            operation="metadata_count",
        ) from e


def insert_metadata(conn: sqlite3.Connection, data: bytes) -> None:
    """
    Store the configurator metadata document.

    Callers check metadata_count first; the table holds at most one row.
    """
    try:
        conn.execute("INSERT INTO metadata (data) VALUES (?)", (data,))
    except sqlite3.Error as e:
        raise StoreError(
            f"Failed to insert metadata: {e}",
            operation="insert_metadata",
        ) from e


def upsert_revision(conn: sqlite3.Connection, revision_id: str, data: bytes) -> None:
    """
    Insert revision data, replacing the payload of an existing row.

    Args:
        conn: SQLite connection
        revision_id: Revision hash id (unique key)
        data: Raw GraphQL Data payload

    Raises:
        StoreError: If the statement fails
    """
    try:
        conn.execute(_UPSERT_REVISION_SQL, (revision_id, data))
    except sqlite3.Error as e:
        raise StoreError(
            f"Failed to upsert revision {revision_id!r}: {e}",
            operation="upsert_revision",
            sql=_UPSERT_REVISION_SQL,
        ) from e


def get_config(conn: sqlite3.Connection) -> dict[str, str]:
    """Return config rows as a dict, first row winning for duplicate keys."""
    try:
        rows = conn.execute("SELECT key, value FROM config ORDER BY rowid").fetchall()
    except sqlite3.Error as e:
        raise StoreError(f"Failed to read config: {e}", operation="get_config") from e
    config: dict[str, str] = {}
    for key, value in rows:
        config.setdefault(key, value)
    return config


def list_revisions(conn: sqlite3.Connection) -> list[tuple[str, int]]:
    """Return (revisionId, payload size in bytes) for every stored revision."""
    try:
        cursor = conn.execute(
            "SELECT revisionId, length(data) FROM revision ORDER BY rowid"
        )
        return [(row[0], row[1] or 0) for row in cursor.fetchall()]
    except sqlite3.Error as e:
        raise StoreError(
            f"Failed to list revisions: {e}",
            operation="list_revisions",
        ) from e


class KeymappStore:
    """
    The Keymapp database, opened for one sync run.

    Opening creates the file if needed, applies the schema and seeds
    default config. The connection is closed when the context exits,
    whether or not an error occurred.
    """

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self.seeded_count = 0

    def __enter__(self) -> "KeymappStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def path(self) -> str:
        return self._db_path

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Store is not open", operation="connection")
        return self._conn

    def open(self) -> None:
        """Open the store and bring its schema and defaults up to date."""
        if self._conn is not None:
            return
        conn = create_connection(self._db_path)
        try:
            initialize_schema(conn)
            self.seeded_count = seed_default_config(conn)
        except StoreError:
            conn.close()
            raise
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def has_metadata(self) -> bool:
        return metadata_count(self.connection) > 0

    def insert_metadata(self, data: bytes) -> None:
        insert_metadata(self.connection, data)

    def upsert_revision(self, revision_id: str, data: bytes) -> None:
        upsert_revision(self.connection, revision_id, data)
        logger.info("Stored revision %s (%d bytes)", revision_id, len(data))

    def get_config(self) -> dict[str, str]:
        return get_config(self.connection)

    def list_revisions(self) -> list[tuple[str, int]]:
        return list_revisions(self.connection)
