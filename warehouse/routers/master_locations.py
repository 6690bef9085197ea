from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from warehouse.core.constants import TARGET_LOCATION
from warehouse.core.security import Actor
from warehouse.dependencies import get_repository, require_actor, require_admin
from warehouse.schemas.admin import DeletionRequestRead
from warehouse.schemas.location import AvailabilityRead, MasterLocationCreate, MasterLocationRead
from warehouse.services import deletion_service, location_service
from warehouse.services.repository import InventoryRepository

router = APIRouter(prefix="/master-locations", tags=["Master locations"])


@router.get("", response_model=list[MasterLocationRead])
def list_master_locations(
    query: Optional[str] = Query(None, description="Location name"),
    repo: InventoryRepository = Depends(get_repository),
):
    return repo.list_master_locations(query=query)


@router.get("/availability", response_model=list[AvailabilityRead])
def availability(
    query: Optional[str] = Query(None, description="Location name"),
    repo: InventoryRepository = Depends(get_repository),
):
    return location_service.location_availability(repo, query=query)


@router.post("", response_model=MasterLocationRead, status_code=status.HTTP_201_CREATED)
def add_master_location(
    payload: MasterLocationCreate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return location_service.add_master_location(repo, payload.name, actor)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
def remove_master_location(
    name: str,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_admin),
):
    location_service.remove_location(repo, name, actor)


@router.post(
    "/{name}/request-deletion",
    response_model=DeletionRequestRead,
    status_code=status.HTTP_201_CREATED,
)
def request_location_deletion(
    name: str,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return deletion_service.request_deletion(repo, TARGET_LOCATION, name, actor)


__all__ = ["router"]
