from functools import lru_cache

from radio_player.core.config import Config, load_config
from radio_player.domain.stations import StationCatalog, create_store


@lru_cache(maxsize=1)
def get_config() -> Config:
    """FastAPI dependency for configuration."""
    return load_config()


@lru_cache(maxsize=1)
def get_catalog() -> StationCatalog:
    """FastAPI dependency for the station catalog (one store per process)."""
    return StationCatalog(create_store(get_config()))
