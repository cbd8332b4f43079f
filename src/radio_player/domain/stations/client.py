"""
HTTP client for the station backend.

Mirrors StationCatalog's contract so the session host can run against a
remote backend or a local store without knowing which.
"""

from typing import Any, Callable, Optional, TypeVar

import requests
from loguru import logger

from .errors import StorageError, ValidationError
from .models import FieldError, Station

T = TypeVar("T")


def _parse_stations(body: Any) -> list[Station]:
    if not isinstance(body, list):
        raise TypeError(f"expected a list of stations, got {type(body).__name__}")
    return [Station.from_dict(item) for item in body]


class StationApiClient:
    """Talks to /api/stations on a running backend."""

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, station_id: Optional[str] = None) -> str:
        url = f"{self.base_url}/api/stations"
        return f"{url}/{station_id}" if station_id else url

    def _request(self, method: str, url: str, failure: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise StorageError(failure) from e

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @classmethod
    def _error_message(cls, response: requests.Response, default: str) -> str:
        body = cls._json(response)
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return default

    @staticmethod
    def _decode(response: requests.Response, parse: Callable[[Any], T], failure: str) -> T:
        """Parse a success body; anything unexpected is a storage failure."""
        try:
            return parse(response.json())
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Unexpected response body from {response.url}: {e}")
            raise StorageError(failure) from e

    @classmethod
    def _raise_validation(cls, response: requests.Response) -> None:
        body = cls._json(response)
        if not isinstance(body, dict):
            body = {}
        errors = [
            FieldError(field=e.get("field", "body"), message=e.get("message", "Invalid value"))
            for e in body.get("errors") or []
            if isinstance(e, dict)
        ]
        raise ValidationError(errors, message=body.get("message", "Invalid station data"))

    def list_stations(self) -> list[Station]:
        failure = "Failed to fetch stations"
        response = self._request("GET", self._url(), failure)
        if response.status_code != 200:
            raise StorageError(self._error_message(response, failure))
        return self._decode(response, _parse_stations, failure)

    def get_station(self, station_id: str) -> Optional[Station]:
        failure = "Failed to fetch station"
        response = self._request("GET", self._url(station_id), failure)
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise StorageError(self._error_message(response, failure))
        return self._decode(response, Station.from_dict, failure)

    def create_station(self, data: dict[str, Any]) -> Station:
        failure = "Failed to create station"
        response = self._request("POST", self._url(), failure, json=data)
        if response.status_code == 400:
            self._raise_validation(response)
        if response.status_code != 201:
            raise StorageError(self._error_message(response, failure))
        return self._decode(response, Station.from_dict, failure)

    def update_station(self, station_id: str, data: dict[str, Any]) -> Optional[Station]:
        failure = "Failed to update station"
        response = self._request("PATCH", self._url(station_id), failure, json=data)
        if response.status_code == 404:
            return None
        if response.status_code == 400:
            self._raise_validation(response)
        if response.status_code != 200:
            raise StorageError(self._error_message(response, failure))
        return self._decode(response, Station.from_dict, failure)

    def delete_station(self, station_id: str) -> bool:
        failure = "Failed to delete station"
        response = self._request("DELETE", self._url(station_id), failure)
        if response.status_code == 404:
            return False
        if response.status_code != 204:
            raise StorageError(self._error_message(response, failure))
        return True
