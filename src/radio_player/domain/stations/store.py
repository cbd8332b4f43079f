"""
Station persistence.

Stores are dumb key-value CRUD over Station records: no validation, no
business rules. The catalog service sits on top and owns both.
"""

import uuid
from pathlib import Path
from typing import Any, Optional, Protocol

from loguru import logger

from radio_player.core.config import Config, get_database_path
from radio_player.core.database import get_db_connection, init_database

from .models import DEFAULT_STATIONS, Station

STATION_FIELDS = ("name", "url", "description", "bitrate")


class StationStore(Protocol):
    """CRUD contract shared by every station store."""

    def list(self) -> list[Station]: ...
    def get(self, station_id: str) -> Optional[Station]: ...
    def create(self, fields: dict[str, Any]) -> Station: ...
    def update(self, station_id: str, changes: dict[str, Any]) -> Optional[Station]: ...
    def delete(self, station_id: str) -> bool: ...


def _new_station_id() -> str:
    return str(uuid.uuid4())


def _station_from_fields(station_id: str, fields: dict[str, Any]) -> Station:
    return Station(
        id=station_id,
        name=fields["name"],
        url=fields["url"],
        description=fields.get("description"),
        bitrate=fields.get("bitrate"),
    )


class MemoryStationStore:
    """In-memory store. Contents are lost when the process exits.

    Dict insertion order is the station list order.
    """

    def __init__(self) -> None:
        self._stations: dict[str, Station] = {}

    def list(self) -> list[Station]:
        return list(self._stations.values())

    def get(self, station_id: str) -> Optional[Station]:
        return self._stations.get(station_id)

    def create(self, fields: dict[str, Any]) -> Station:
        station = _station_from_fields(_new_station_id(), fields)
        self._stations[station.id] = station
        return station

    def update(self, station_id: str, changes: dict[str, Any]) -> Optional[Station]:
        station = self._stations.get(station_id)
        if station is None:
            return None

        merged = {**station.to_dict(), **_only_station_fields(changes)}
        updated = _station_from_fields(station_id, merged)
        self._stations[station_id] = updated
        return updated

    def delete(self, station_id: str) -> bool:
        return self._stations.pop(station_id, None) is not None


class SqliteStationStore:
    """Durable store backed by the `stations` table."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        init_database(db_path)

    @staticmethod
    def _row_to_station(row: Any) -> Station:
        return Station(
            id=row["id"],
            name=row["name"],
            url=row["url"],
            description=row["description"],
            bitrate=row["bitrate"],
        )

    def list(self) -> list[Station]:
        with get_db_connection(self.db_path) as conn:
            cursor = conn.execute("SELECT * FROM stations ORDER BY rowid")
            return [self._row_to_station(row) for row in cursor.fetchall()]

    def get(self, station_id: str) -> Optional[Station]:
        with get_db_connection(self.db_path) as conn:
            cursor = conn.execute("SELECT * FROM stations WHERE id = ?", (station_id,))
            row = cursor.fetchone()
            return self._row_to_station(row) if row else None

    def create(self, fields: dict[str, Any]) -> Station:
        station = _station_from_fields(_new_station_id(), fields)
        with get_db_connection(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO stations (id, name, url, description, bitrate)
                VALUES (?, ?, ?, ?, ?)
                """,
                (station.id, station.name, station.url, station.description, station.bitrate),
            )
            conn.commit()
        return station

    def update(self, station_id: str, changes: dict[str, Any]) -> Optional[Station]:
        changes = _only_station_fields(changes)
        if not changes:
            return self.get(station_id)

        assignments = ", ".join(f"{column} = ?" for column in changes)
        with get_db_connection(self.db_path) as conn:
            cursor = conn.execute(
                f"""
                UPDATE stations
                SET {assignments}, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (*changes.values(), station_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
        return self.get(station_id)

    def delete(self, station_id: str) -> bool:
        with get_db_connection(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM stations WHERE id = ?", (station_id,))
            conn.commit()
            return cursor.rowcount > 0


def _only_station_fields(changes: dict[str, Any]) -> dict[str, Any]:
    """Drop anything that is not a mutable station column (notably `id`)."""
    return {key: value for key, value in changes.items() if key in STATION_FIELDS}


def seed_default_stations(store: StationStore) -> int:
    """Add the default stations to an empty store.

    Returns:
        Number of stations added
    """
    if store.list():
        return 0

    for fields in DEFAULT_STATIONS:
        store.create(dict(fields))
    logger.info(f"Seeded {len(DEFAULT_STATIONS)} default stations")
    return len(DEFAULT_STATIONS)


def create_store(config: Config) -> StationStore:
    """Build the configured station store, seeding it if requested."""
    store: StationStore
    if config.storage.backend == "sqlite":
        db_path = get_database_path(config)
        logger.info(f"Using SQLite station store: {db_path}")
        store = SqliteStationStore(db_path)
    else:
        logger.info("Using in-memory station store")
        store = MemoryStationStore()

    if config.storage.seed_defaults:
        seed_default_stations(store)

    return store
