"""
Travel endpoints for API v1.

These routes provide CRUD operations for travels.  Each handler makes
exactly one ``TravelRepository`` call and translates storage errors to
HTTP responses.  Handlers are plain functions because PyMongo is
blocking; FastAPI runs them in its worker thread pool.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from travel_list_api.app.core.db import TravelRepository, get_repository
from travel_list_api.app.core.errors import InvalidIdError, NotFoundError, StorageError
from travel_list_api.app.schemas.travel import TravelCreate, TravelFieldRead, TravelFieldUpdate, TravelRead


router = APIRouter()


def _storage_failure(exc: StorageError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/", response_model=List[TravelRead])
def list_travels(repo: TravelRepository = Depends(get_repository)) -> List[dict]:
    """Return every travel."""
    try:
        return repo.list_all()
    except StorageError as e:
        raise _storage_failure(e) from e


@router.get("/{travel_id}", response_model=TravelRead)
def get_travel(travel_id: str, repo: TravelRepository = Depends(get_repository)) -> dict:
    """Retrieve a single travel by its ID.

    Raises 400 for a malformed id and 404 if the travel does not exist.
    """
    try:
        return repo.get_one(travel_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StorageError as e:
        raise _storage_failure(e) from e


@router.post("/", response_model=TravelRead, status_code=status.HTTP_201_CREATED)
def create_travel(travel: TravelCreate, repo: TravelRepository = Depends(get_repository)) -> dict:
    """Create a new travel.

    The id is always generated by the database; an ``id`` in the body
    is ignored.
    """
    try:
        return repo.insert_one(travel.model_dump())
    except StorageError as e:
        raise _storage_failure(e) from e


@router.put("/{travel_id}", response_model=TravelRead)
def replace_travel(
    travel_id: str,
    travel: TravelCreate,
    repo: TravelRepository = Depends(get_repository),
) -> dict:
    """Replace a travel with the request body.

    This is a full substitution: fields absent from the body are removed
    from the stored travel.  Use PATCH to change a single field.
    """
    try:
        return repo.replace_one(travel_id, travel.model_dump())
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StorageError as e:
        raise _storage_failure(e) from e


@router.patch("/{travel_id}", response_model=TravelFieldRead)
def update_travel_field(
    travel_id: str,
    update: TravelFieldUpdate,
    repo: TravelRepository = Depends(get_repository),
) -> TravelFieldRead:
    """Set one field of a travel, leaving the others unchanged."""
    try:
        repo.update_field(travel_id, update.field, update.value)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StorageError as e:
        raise _storage_failure(e) from e
    return TravelFieldRead(id=travel_id, field=update.field, value=update.value)


@router.delete("/{travel_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_travel(travel_id: str, repo: TravelRepository = Depends(get_repository)) -> None:
    """Delete a travel.  Deleting an unknown id still returns 204."""
    try:
        repo.delete_one(travel_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StorageError as e:
        raise _storage_failure(e) from e
    return None
