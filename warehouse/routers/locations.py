from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from warehouse.core.security import Actor
from warehouse.dependencies import get_repository, require_actor, require_admin
from warehouse.schemas.exit import ExitCreate, ExitRead, ExitResponse
from warehouse.schemas.location import (
    LocationEntryCreate,
    LocationEntryRead,
    LocationEntryUpdate,
    MoveRequest,
    MoveResponse,
)
from warehouse.services import location_service, movement_service
from warehouse.services.repository import InventoryRepository

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("", response_model=list[LocationEntryRead])
def list_locations(
    query: Optional[str] = Query(None, description="Product name, SKU or location"),
    repo: InventoryRepository = Depends(get_repository),
):
    return location_service.list_location_entries(repo, query=query)


@router.post("", response_model=LocationEntryRead, status_code=status.HTTP_201_CREATED)
def add_location_entry(
    payload: LocationEntryCreate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return location_service.add_location_entry(
        repo,
        payload.sku,
        payload.location,
        payload.volume,
        actor=actor,
    )


@router.put("/{entry_id}", response_model=Optional[LocationEntryRead])
def update_location_entry(
    entry_id: int,
    payload: LocationEntryUpdate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return location_service.update_location_entry(
        repo,
        entry_id,
        volume=payload.volume,
        location=payload.location,
        actor=actor,
    )


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location_entry(
    entry_id: int,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_admin),
):
    location_service.delete_location_entry(repo, entry_id, actor)


@router.post("/move", response_model=MoveResponse)
def move_volume(
    payload: MoveRequest,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    result = movement_service.move_volume(
        repo,
        payload.source_location_id,
        payload.destination_location_name,
        payload.volume_to_move,
        actor=actor,
    )
    return MoveResponse(
        source=LocationEntryRead.model_validate(result.source) if result.source else None,
        destination=LocationEntryRead.model_validate(result.destination),
        volume=result.volume,
    )


@router.post("/{entry_id}/exit", response_model=ExitResponse, status_code=status.HTTP_201_CREATED)
def create_exit(
    entry_id: int,
    payload: ExitCreate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    result = movement_service.create_exit(
        repo,
        entry_id,
        payload.exit_type,
        payload.volume_to_exit,
        store=payload.store,
        observation=payload.observation,
        actor=actor,
    )
    return ExitResponse(
        exit=ExitRead.model_validate(result.exit),
        source=LocationEntryRead.model_validate(result.source) if result.source else None,
    )


__all__ = ["router"]
