"""
conftest.py - pytest fixtures for keymapp_sync tests.
"""

import os
import tempfile

import pytest

from tests.fakes import FakeService


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test databases."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def store_path(temp_dir):
    return os.path.join(temp_dir, "keymapp.sqlite3")


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def client(service):
    client = service.client()
    yield client
    client.close()
