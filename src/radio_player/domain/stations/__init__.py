"""Stations domain - station records, storage and the catalog service.

This domain handles:
- The Station model and default seed stations
- Swappable stores (in-memory, SQLite)
- Validated CRUD (StationCatalog) and its HTTP twin (StationApiClient)
"""

from .catalog import StationCatalog, is_absolute_url, validate_create, validate_update
from .client import StationApiClient
from .errors import CatalogError, StorageError, ValidationError
from .models import DEFAULT_STATIONS, FieldError, Station
from .store import (
    MemoryStationStore,
    SqliteStationStore,
    StationStore,
    create_store,
    seed_default_stations,
)

__all__ = [
    # Models
    "Station",
    "FieldError",
    "DEFAULT_STATIONS",
    # Errors
    "CatalogError",
    "StorageError",
    "ValidationError",
    # Stores
    "StationStore",
    "MemoryStationStore",
    "SqliteStationStore",
    "create_store",
    "seed_default_stations",
    # Catalog
    "StationCatalog",
    "StationApiClient",
    "is_absolute_url",
    "validate_create",
    "validate_update",
]
