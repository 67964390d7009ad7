"""
schema.py - Keymapp table schema definitions.

Defines the exact schema Keymapp creates for its own database.
Table and column names, declared types and constraints are read by
Keymapp and must not drift, so the statements are kept verbatim.
"""

from typing import Final

# config table - application settings as key/value text pairs.
# Keys are unique by convention only; there is no constraint.
CONFIG_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS "config" (
            key TEXT,
            value TEXT
        )
"""

# metadata table - the configurator's metadata.json, at most one row
METADATA_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS "metadata" (
            data BLOB
        )
"""

HEATMAP_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS "heatmap" (
            revisionId TEXT NOT NULL UNIQUE,
            enabled boolean DEFAULT 0,
            data BLOB DEFAULT NULL
        )
"""

# revision table - GraphQL layout data keyed by revision hash id
REVISION_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS "revision" (
            revisionId TEXT NOT NULL UNIQUE,
            data BLOB DEFAULT NULL
        )
"""

SMART_LAYER_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS "smart_layer" (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            app TEXT NOT NULL,
            layer INTEGER NOT NULL,
            layoutId TEXT NOT NULL,
            revisionId TEXT NOT NULL
        )
"""

AUTH_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS "auth" (
            token TEXT NOT NULL UNIQUE,
            username TEXT NOT NULL
        )
"""

# All schema statements in order
ALL_SCHEMA_STATEMENTS: Final[tuple[str, ...]] = (
    CONFIG_SCHEMA,
    METADATA_SCHEMA,
    HEATMAP_SCHEMA,
    REVISION_SCHEMA,
    SMART_LAYER_SCHEMA,
    AUTH_SCHEMA,
)

ALL_TABLE_NAMES: Final[tuple[str, ...]] = (
    "config",
    "metadata",
    "heatmap",
    "revision",
    "smart_layer",
    "auth",
)
