"""
Station catalog error taxonomy.

Not-found is deliberately absent: lookups return None / False instead.
"""

from .models import FieldError


class CatalogError(Exception):
    """Base class for station catalog failures."""


class ValidationError(CatalogError):
    """Station input failed validation. Carries one entry per invalid field."""

    def __init__(self, errors: list[FieldError], message: str = "Invalid station data"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "errors": [{"field": e.field, "message": e.message} for e in self.errors],
        }


class StorageError(CatalogError):
    """The backing store failed. The message is safe to show to users."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)
        self.message = message
