"""
engine.py - Sync orchestration.

KeymappSync is the primary public interface. One run:
- decodes the configuration-page address
- fetches the revision from the GraphQL endpoint
- opens the store, creating tables and default config as needed
- fetches and stores metadata, only when none is stored yet
- upserts the revision row

The revision is fetched before the store is touched, so a bad address
or an unreachable service leaves the store file as it was.
"""

import logging
import time
from dataclasses import dataclass

from keymapp_sync.address import parse_layout_address
from keymapp_sync.db.store import KeymappStore
from keymapp_sync.remote.client import OryxClient

logger = logging.getLogger("keymapp_sync.engine")


@dataclass(frozen=True)
class SyncResult:
    revision_id: str
    revision_bytes: int
    metadata_fetched: bool
    config_rows_seeded: int
    store_path: str


class KeymappSync:
    """
    Synchronizes one layout revision into a Keymapp store.
    """

    def __init__(self, store_path: str, client: OryxClient | None = None):
        self._store_path = store_path
        self._client = client

    def run(self, address: str) -> SyncResult:
        """
        Run a full synchronization for address.

        Raises:
            InvalidAddressError: If address cannot be decoded
            FetchFailedError: If a remote request fails
            MalformedResponseError: If the layout response cannot be decoded
            StoreError: If the store cannot be opened or written
        """
        started = time.monotonic()
        layout = parse_layout_address(address)

        owns_client = self._client is None
        client = self._client if self._client is not None else OryxClient()
        try:
            revision = client.fetch_revision(layout)

            with KeymappStore(self._store_path) as store:
                metadata_fetched = False
                if not store.has_metadata():
                    store.insert_metadata(client.fetch_metadata())
                    metadata_fetched = True
                else:
                    logger.debug("Metadata already stored; not fetching")

                store.upsert_revision(revision.revision_id, revision.data)
                seeded = store.seeded_count
        finally:
            if owns_client:
                client.close()

        logger.info(
            "Sync completed: revision=%s, metadata_fetched=%s",
            revision.revision_id,
            metadata_fetched,
            extra={
                "event": "sync_completed",
                "revision_id": revision.revision_id,
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )
        return SyncResult(
            revision_id=revision.revision_id,
            revision_bytes=len(revision.data),
            metadata_fetched=metadata_fetched,
            config_rows_seeded=seeded,
            store_path=self._store_path,
        )
