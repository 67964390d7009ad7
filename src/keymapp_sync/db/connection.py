"""
connection.py - SQLite database connection management.

Handles connection creation for the Keymapp store. The database file
belongs to Keymapp, so no PRAGMA is changed: the store keeps whatever
journal mode Keymapp (or SQLite's default) gave it.
"""

import logging
import sqlite3
from pathlib import Path

from keymapp_sync.errors import StoreError

logger = logging.getLogger("keymapp_sync.db")


def create_connection(db_path: str, read_only: bool = False) -> sqlite3.Connection:
    """
    Open the store at db_path, creating the file if it is absent.

    The parent directory must already exist.

    Args:
        db_path: Path to SQLite database file
        read_only: Open an existing file without write access; a
            missing file is an error instead of being created

    Returns:
        sqlite3.Connection in autocommit mode

    Raises:
        StoreError: If the file cannot be opened as a database
    """
    if read_only:
        target, uri = Path(db_path).resolve().as_uri() + "?mode=ro", True
    else:
        target, uri = str(db_path), False

    try:
        conn = sqlite3.connect(
            target,
            isolation_level=None,  # Autocommit: every statement stands alone
            uri=uri,
        )
    except sqlite3.Error as e:
        raise StoreError(
            f"Failed to open database: {e}",
            operation="connect",
        ) from e

    # Forces SQLite to read the header, so a non-database file fails here
    try:
        conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
    except sqlite3.Error as e:
        conn.close()
        raise StoreError(
            f"Failed to open database: {e}",
            operation="connect",
        ) from e

    logger.debug("Opened store %s", db_path)
    return conn


def integrity_problems(conn: sqlite3.Connection) -> list[str]:
    """
    Run PRAGMA integrity_check and return what it reports.

    An empty list means the store is intact.
    """
    try:
        rows = conn.execute("PRAGMA integrity_check").fetchall()
    except sqlite3.Error as e:
        raise StoreError(
            f"Integrity check failed to run: {e}",
            operation="integrity_check",
        ) from e
    messages = [row[0] for row in rows]
    return [] if messages == ["ok"] else messages
