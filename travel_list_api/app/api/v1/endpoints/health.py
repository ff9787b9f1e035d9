"""
Health endpoint for API v1.

Pings the database through the shared repository.  Returns 503 when
the database does not answer so that load balancers can take the
instance out of rotation.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from travel_list_api.app.core.db import TravelRepository, get_repository
from travel_list_api.app.core.errors import StorageConnectionError
from travel_list_api.app.schemas.travel import HealthRead

router = APIRouter()


@router.get("/", response_model=HealthRead)
def get_health(repo: TravelRepository = Depends(get_repository)) -> HealthRead:
    try:
        return HealthRead(status=repo.health_check())
    except StorageConnectionError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
