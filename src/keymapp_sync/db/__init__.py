"""Keymapp database schema, initialization and row access."""

from keymapp_sync.db.connection import create_connection
from keymapp_sync.db.migrations import initialize_schema, seed_default_config
from keymapp_sync.db.store import (
    KeymappStore,
    get_config,
    insert_metadata,
    list_revisions,
    metadata_count,
    upsert_revision,
)

__all__ = [
    "KeymappStore",
    "create_connection",
    "initialize_schema",
    "seed_default_config",
    "metadata_count",
    "insert_metadata",
    "upsert_revision",
    "get_config",
    "list_revisions",
]
