"""Tests for station stores (in-memory and SQLite)."""

import uuid

import pytest

from radio_player.core.config import Config, StorageConfig
from radio_player.domain.stations.models import DEFAULT_STATIONS
from radio_player.domain.stations.store import (
    MemoryStationStore,
    SqliteStationStore,
    create_store,
    seed_default_stations,
)

JAZZ = {"name": "Jazz FM", "url": "https://jazz.example/stream", "description": None, "bitrate": None}


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStationStore()
    return SqliteStationStore(tmp_path / "stations.db")


class TestStationStore:
    """Behaviour shared by every store."""

    def test_create_assigns_uuid(self, store):
        station = store.create(dict(JAZZ))
        uuid.UUID(station.id)
        assert station.name == "Jazz FM"

    def test_ids_unique(self, store):
        ids = {store.create(dict(JAZZ)).id for _ in range(5)}
        assert len(ids) == 5

    def test_list_in_creation_order(self, store):
        names = ["One", "Two", "Three"]
        for name in names:
            store.create({**JAZZ, "name": name})
        assert [s.name for s in store.list()] == names

    def test_get(self, store):
        created = store.create(dict(JAZZ))
        assert store.get(created.id) == created
        assert store.get("missing") is None

    def test_update_merges(self, store):
        created = store.create({**JAZZ, "description": "Smooth"})
        updated = store.update(created.id, {"name": "Jazz 2"})

        assert updated.name == "Jazz 2"
        assert updated.description == "Smooth"
        assert store.get(created.id) == updated

    def test_update_never_changes_id(self, store):
        created = store.create(dict(JAZZ))
        updated = store.update(created.id, {"id": "other", "name": "X"})

        assert updated.id == created.id
        assert store.get("other") is None

    def test_update_can_clear_optional_field(self, store):
        created = store.create({**JAZZ, "bitrate": "128 kbps"})
        assert store.update(created.id, {"bitrate": None}).bitrate is None

    def test_update_missing(self, store):
        assert store.update("missing", {"name": "X"}) is None

    def test_delete(self, store):
        created = store.create(dict(JAZZ))
        assert store.delete(created.id) is True
        assert store.get(created.id) is None
        assert store.delete(created.id) is False


class TestSqliteStationStore:
    def test_survives_reopen(self, tmp_path):
        db_path = tmp_path / "stations.db"
        created = SqliteStationStore(db_path).create(dict(JAZZ))

        assert SqliteStationStore(db_path).get(created.id) == created


class TestSeeding:
    def test_seeds_empty_store(self):
        store = MemoryStationStore()
        assert seed_default_stations(store) == len(DEFAULT_STATIONS)
        assert [s.name for s in store.list()] == [d["name"] for d in DEFAULT_STATIONS]

    def test_leaves_populated_store_alone(self):
        store = MemoryStationStore()
        store.create(dict(JAZZ))
        assert seed_default_stations(store) == 0
        assert len(store.list()) == 1

    def test_create_store_memory_seeded(self):
        store = create_store(Config())
        assert isinstance(store, MemoryStationStore)
        assert len(store.list()) == len(DEFAULT_STATIONS)

    def test_create_store_sqlite_unseeded(self, tmp_path):
        config = Config(
            storage=StorageConfig(
                backend="sqlite",
                database_path=str(tmp_path / "radio.db"),
                seed_defaults=False,
            )
        )
        store = create_store(config)

        assert isinstance(store, SqliteStationStore)
        assert store.list() == []
