"""
keymapp_sync - Offline provisioning for the ZSA Keymapp database

Fetches layout revisions and configurator metadata from the ZSA
configuration service and writes them into the SQLite database Keymapp
reads, so Keymapp itself never needs network access.
"""

from keymapp_sync.address import LayoutAddress, parse_layout_address
from keymapp_sync.db.store import KeymappStore
from keymapp_sync.engine import KeymappSync, SyncResult
from keymapp_sync.errors import (
    KeymappSyncError,
    InvalidAddressError,
    FetchFailedError,
    MalformedResponseError,
    StoreError,
)
from keymapp_sync.remote.client import OryxClient, RevisionPayload

__version__ = "0.1.0"
__all__ = [
    # Core
    "KeymappSync",
    "SyncResult",
    "KeymappStore",
    "OryxClient",
    "RevisionPayload",
    "LayoutAddress",
    "parse_layout_address",
    # Errors
    "KeymappSyncError",
    "InvalidAddressError",
    "FetchFailedError",
    "MalformedResponseError",
    "StoreError",
]
