"""
test_engine.py - End-to-end tests for a sync run.

The configurator is replaced by an in-process fake; the store is a real
SQLite file in a temporary directory.
"""

import os
import sqlite3

import httpx
import pytest

from keymapp_sync import KeymappSync
from keymapp_sync.config import GRAPHQL_URL, METADATA_URL
from keymapp_sync.db.store import KeymappStore
from keymapp_sync.errors import (
    FetchFailedError,
    InvalidAddressError,
    MalformedResponseError,
)
from keymapp_sync.remote.client import OryxClient
from tests.fakes import ADDRESS, METADATA_BODY, FakeService, revision_body


def fetch_all(store_path, sql):
    conn = sqlite3.connect(store_path)
    try:
        return conn.execute(sql).fetchall()
    finally:
        conn.close()


class TestSyncRun:
    def test_first_run_populates_empty_store(self, store_path, service, client):
        result = KeymappSync(store_path, client=client).run(ADDRESS)

        assert result.revision_id == "efgh5678"
        assert result.metadata_fetched is True
        assert result.config_rows_seeded == 7
        assert fetch_all(store_path, "SELECT COUNT(*) FROM config") == [(7,)]
        assert fetch_all(store_path, "SELECT data FROM metadata") == [(METADATA_BODY,)]
        rows = fetch_all(store_path, "SELECT revisionId FROM revision")
        assert rows == [("efgh5678",)]

    def test_revision_data_is_data_member(self, store_path, client):
        KeymappSync(store_path, client=client).run(ADDRESS)
        [(data,)] = fetch_all(store_path, "SELECT data FROM revision")
        assert data.startswith(b'{"layout": ')
        assert b'"data"' not in data

    def test_existing_metadata_is_not_fetched(self, store_path, service, client):
        with KeymappStore(store_path) as store:
            store.insert_metadata(b"previously stored")

        result = KeymappSync(store_path, client=client).run(ADDRESS)

        assert result.metadata_fetched is False
        assert service.calls_to(METADATA_URL) == 0
        assert service.calls_to(GRAPHQL_URL) == 1
        assert fetch_all(store_path, "SELECT data FROM metadata") == [(b"previously stored",)]

    def test_second_run_is_idempotent(self, store_path, service, client):
        engine = KeymappSync(store_path, client=client)
        engine.run(ADDRESS)
        result = engine.run(ADDRESS)

        assert result.metadata_fetched is False
        assert result.config_rows_seeded == 0
        assert service.calls_to(METADATA_URL) == 1
        assert service.calls_to(GRAPHQL_URL) == 2
        assert fetch_all(store_path, "SELECT COUNT(*) FROM config") == [(7,)]
        assert fetch_all(store_path, "SELECT COUNT(*) FROM metadata") == [(1,)]
        assert fetch_all(store_path, "SELECT COUNT(*) FROM revision") == [(1,)]

    def test_resync_replaces_revision_payload(self, store_path, service, client):
        engine = KeymappSync(store_path, client=client)
        engine.run(ADDRESS)
        service.revision = revision_body(title="Renamed")
        engine.run(ADDRESS)

        [(data,)] = fetch_all(store_path, "SELECT data FROM revision")
        assert b"Renamed" in data

    def test_consumer_settings_survive_run(self, store_path, client):
        with KeymappStore(store_path) as store:
            store.connection.execute(
                "UPDATE config SET value = '1' WHERE key = 'update_check'"
            )
        KeymappSync(store_path, client=client).run(ADDRESS)
        rows = fetch_all(store_path, "SELECT value FROM config WHERE key = 'update_check'")
        assert rows == [("1",)]

    def test_client_left_open_when_injected(self, store_path, service, client):
        KeymappSync(store_path, client=client).run(ADDRESS)
        # Still usable by its owner
        assert client.fetch_metadata() == METADATA_BODY


class TestSyncFailures:
    """Every failure aborts the run."""

    def test_invalid_address_makes_no_requests(self, store_path, service, client):
        with pytest.raises(InvalidAddressError):
            KeymappSync(store_path, client=client).run("https://configure.zsa.io/ErgoDox")
        assert service.requests == []
        assert not os.path.exists(store_path)

    def test_malformed_response_leaves_store_untouched(self, store_path):
        service = FakeService(revision=b'{"Data": {"layout": {}}}')
        with service.client() as client:
            with pytest.raises(MalformedResponseError):
                KeymappSync(store_path, client=client).run(ADDRESS)
        assert not os.path.exists(store_path)

    def test_metadata_failure_is_fatal(self, store_path):
        service = FakeService()

        def handler(request):
            if str(request.url) == METADATA_URL:
                raise httpx.ConnectError("unreachable", request=request)
            return service.handler(request)

        with OryxClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(FetchFailedError):
                KeymappSync(store_path, client=client).run(ADDRESS)

        # Schema and defaults were written; metadata and revision were not
        assert fetch_all(store_path, "SELECT COUNT(*) FROM config") == [(7,)]
        assert fetch_all(store_path, "SELECT COUNT(*) FROM metadata") == [(0,)]
        assert fetch_all(store_path, "SELECT COUNT(*) FROM revision") == [(0,)]
