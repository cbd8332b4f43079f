"""
Station catalog service.

CRUD over a StationStore with input validation. Storage failures never
escape unshaped: they are re-raised as StorageError with a user-facing
message.
"""

from typing import Any, Optional
from urllib.parse import urlparse

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import StorageError, ValidationError
from .models import FieldError, Station
from .store import StationStore

_FIELD_LABELS = {"name": "Name", "url": "URL"}


def is_absolute_url(value: str) -> bool:
    """True when value has both a scheme and a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class StationCreate(BaseModel):
    """Input for a new station."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str
    url: str
    description: Optional[str] = None
    bitrate: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("url")
    @classmethod
    def _url_is_absolute(cls, value: str) -> str:
        if not value:
            raise ValueError("URL is required")
        if not is_absolute_url(value):
            raise ValueError("Must be a valid absolute URL")
        return value

    @field_validator("description", "bitrate", mode="before")
    @classmethod
    def _normalize_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)


class StationUpdate(BaseModel):
    """Partial input for an existing station. Only supplied fields are checked."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    bitrate: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: Optional[str]) -> str:
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("url")
    @classmethod
    def _url_is_absolute(cls, value: Optional[str]) -> str:
        if not value:
            raise ValueError("URL is required")
        if not is_absolute_url(value):
            raise ValueError("Must be a valid absolute URL")
        return value

    @field_validator("description", "bitrate", mode="before")
    @classmethod
    def _normalize_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    """Flatten pydantic errors into one FieldError per field."""
    errors: list[FieldError] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        if field in seen:
            continue
        seen.add(field)
        message = error["msg"].removeprefix("Value error, ")
        if error["type"] == "missing":
            message = f"{_FIELD_LABELS.get(field, field)} is required"
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_create(data: Any) -> dict[str, Any]:
    """Validate new-station input.

    Returns:
        Normalized fields (optional fields absent -> None)

    Raises:
        ValidationError: Listing every invalid field
    """
    if not isinstance(data, dict):
        raise ValidationError([FieldError("body", "Expected a JSON object")])
    try:
        return StationCreate.model_validate(data).model_dump()
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e


def validate_update(data: Any) -> dict[str, Any]:
    """Validate partial station input.

    Returns:
        Only the fields the caller supplied, normalized

    Raises:
        ValidationError: Listing every invalid field
    """
    if not isinstance(data, dict):
        raise ValidationError([FieldError("body", "Expected a JSON object")])
    try:
        update = StationUpdate.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e
    return update.model_dump(include=update.model_fields_set)


class StationCatalog:
    """Validated CRUD over an injected StationStore."""

    def __init__(self, store: StationStore):
        self.store = store

    def list_stations(self) -> list[Station]:
        try:
            return self.store.list()
        except Exception as e:
            logger.exception("Failed to list stations")
            raise StorageError("Failed to fetch stations") from e

    def get_station(self, station_id: str) -> Optional[Station]:
        """Get a station by ID, or None if it does not exist."""
        try:
            return self.store.get(station_id)
        except Exception as e:
            logger.exception(f"Failed to fetch station {station_id}")
            raise StorageError("Failed to fetch station") from e

    def create_station(self, data: Any) -> Station:
        """Validate and create a station with a fresh id.

        Raises:
            ValidationError: If name/url are missing or malformed
            StorageError: If the store fails
        """
        fields = validate_create(data)
        try:
            station = self.store.create(fields)
        except Exception as e:
            logger.exception("Failed to create station")
            raise StorageError("Failed to create station") from e

        logger.info(f"Created station '{station.name}' with id {station.id}")
        return station

    def update_station(self, station_id: str, data: Any) -> Optional[Station]:
        """Apply a partial update. Returns None for an unknown id.

        Last write wins; the id is never changed.
        """
        changes = validate_update(data)
        try:
            station = self.store.update(station_id, changes)
        except Exception as e:
            logger.exception(f"Failed to update station {station_id}")
            raise StorageError("Failed to update station") from e

        if station is None:
            logger.debug(f"Update for unknown station {station_id}")
            return None

        logger.info(f"Updated station {station_id}: {sorted(changes)}")
        return station

    def delete_station(self, station_id: str) -> bool:
        """Delete a station. Returns False for an unknown id."""
        try:
            deleted = self.store.delete(station_id)
        except Exception as e:
            logger.exception(f"Failed to delete station {station_id}")
            raise StorageError("Failed to delete station") from e

        if deleted:
            logger.info(f"Deleted station {station_id}")
        return deleted
