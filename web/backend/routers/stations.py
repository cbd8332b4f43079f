"""
Station catalog API endpoints.

Bodies are read raw and validated by the catalog, so bad input comes back as
400 with per-field messages rather than FastAPI's 422.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger

from radio_player.domain.stations import (
    Station,
    StationCatalog,
    StorageError,
    ValidationError,
)

from ..deps import get_catalog
from ..schemas import StationResponse

router = APIRouter(prefix="/stations", tags=["stations"])

NOT_FOUND = "Station not found"


def _station_to_response(station: Station) -> StationResponse:
    """Convert Station dataclass to response model."""
    return StationResponse(**station.to_dict())


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        # Empty or malformed JSON; the catalog reports it as invalid input
        return None


def _validation_response(error: ValidationError) -> JSONResponse:
    logger.debug(f"Rejected station input: {error.fields}")
    return JSONResponse(status_code=400, content=error.to_dict())


@router.get("", response_model=list[StationResponse])
def list_stations(catalog: StationCatalog = Depends(get_catalog)) -> list[StationResponse]:
    """List all stations in creation order."""
    try:
        stations = catalog.list_stations()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return [_station_to_response(s) for s in stations]


@router.get("/{station_id}", response_model=StationResponse)
def get_station(
    station_id: str, catalog: StationCatalog = Depends(get_catalog)
) -> StationResponse:
    try:
        station = catalog.get_station(station_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=e.message)

    if station is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return _station_to_response(station)


@router.post("", status_code=201, response_model=StationResponse)
async def create_station(request: Request, catalog: StationCatalog = Depends(get_catalog)):
    """Create a station. The id is always generated server-side."""
    payload = await _read_body(request)
    try:
        station = catalog.create_station(payload)
    except ValidationError as e:
        return _validation_response(e)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return _station_to_response(station)


@router.patch("/{station_id}", response_model=StationResponse)
async def update_station(
    station_id: str, request: Request, catalog: StationCatalog = Depends(get_catalog)
):
    """Partially update a station. Unknown fields (including id) are ignored."""
    payload = await _read_body(request)
    try:
        station = catalog.update_station(station_id, payload)
    except ValidationError as e:
        return _validation_response(e)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=e.message)

    if station is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return _station_to_response(station)


@router.delete("/{station_id}", status_code=204)
def delete_station(station_id: str, catalog: StationCatalog = Depends(get_catalog)) -> Response:
    try:
        deleted = catalog.delete_station(station_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=e.message)

    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=204)
