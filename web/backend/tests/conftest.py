"""Pytest configuration for backend tests.

Every test gets a fresh in-memory catalog in place of the configured one.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add repository root to path so `web.backend` imports resolve
repo_root = Path(__file__).parent.parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from radio_player.domain.stations import MemoryStationStore, StationCatalog  # noqa: E402
from web.backend.deps import get_catalog  # noqa: E402
from web.backend.main import app  # noqa: E402


class BrokenStore:
    """Store whose every operation fails."""

    def _fail(self, *args, **kwargs):
        raise RuntimeError("database is locked")

    list = get = create = update = delete = _fail


@pytest.fixture
def catalog():
    return StationCatalog(MemoryStationStore())


@pytest.fixture
def client(catalog):
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_catalog] = lambda: StationCatalog(BrokenStore())
    yield TestClient(app)
    app.dependency_overrides.clear()
