"""
migrations.py - Store initialization.

Handles creation of the Keymapp tables and seeding of default config
rows. Both steps are idempotent and safe to interrupt: a run that dies
between them is completed by the next run, so no "initialized" flag
is recorded anywhere.
"""

import logging
import sqlite3

from keymapp_sync.config import DEFAULT_CONFIG
from keymapp_sync.db.schema import ALL_SCHEMA_STATEMENTS
from keymapp_sync.errors import StoreError

logger = logging.getLogger("keymapp_sync.db")


def initialize_schema(conn: sqlite3.Connection) -> None:
    """
    Create every Keymapp table that does not exist yet.

    Tables that already exist, and their content, are left untouched.

    Args:
        conn: SQLite connection

    Raises:
        StoreError: If a CREATE TABLE statement fails
    """
    for sql in ALL_SCHEMA_STATEMENTS:
        try:
            conn.execute(sql)
        except sqlite3.Error as e:
            raise StoreError(
                f"Failed to create tables: {e}",
                operation="create_tables",
                sql=sql,
            ) from e


def seed_default_config(conn: sqlite3.Connection) -> int:
    """
    Insert each default config row whose key is not present.

    Existing keys are never overwritten, including values Keymapp has
    changed from their default.

    Args:
        conn: SQLite connection

    Returns:
        Number of rows inserted

    Raises:
        StoreError: If a lookup or insert fails
    """
    inserted = 0
    for key, value in DEFAULT_CONFIG:
        if _config_key_exists(conn, key):
            continue
        try:
            conn.execute(
                "INSERT INTO config (key, value) VALUES (?, ?)",
                (key, value),
            )
        except sqlite3.Error as e:
            raise StoreError(
                f"Failed to seed config key {key!r}: {e}",
                operation="seed_config",
            ) from e
        inserted += 1

    if inserted:
        logger.info("Seeded %d default config rows", inserted)
    return inserted


def _config_key_exists(conn: sqlite3.Connection, key: str) -> bool:
    try:
        cursor = conn.execute("SELECT count(*) FROM config WHERE key = ?", (key,))
        return cursor.fetchone()[0] != 0
    except sqlite3.Error as e:
        raise StoreError(
            f"Failed to look up config key {key!r}: {e}",
            operation="seed_config",
        ) from e
