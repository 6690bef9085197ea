from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from warehouse.core.security import Actor
from warehouse.dependencies import get_repository, require_actor, require_admin
from warehouse.schemas.exit import ExitObservationUpdate, ExitRead
from warehouse.services import movement_service
from warehouse.services.dashboard_service import exit_summary
from warehouse.services.repository import InventoryRepository

router = APIRouter(prefix="/exits", tags=["Exits"])


@router.get("", response_model=list[ExitRead])
def list_exits(
    query: Optional[str] = Query(None, description="Product name, SKU, store or observation"),
    repo: InventoryRepository = Depends(get_repository),
):
    return movement_service.list_exits(repo, query=query)


@router.get("/summary")
def exits_by_type(
    stores: Optional[str] = Query(None, description="Stores to break out (comma-separated)"),
    repo: InventoryRepository = Depends(get_repository),
):
    return exit_summary(repo, store_filters=stores)


@router.put("/{exit_id}/observation", response_model=ExitRead)
def update_observation(
    exit_id: int,
    payload: ExitObservationUpdate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return movement_service.update_exit_observation(repo, exit_id, payload.observation, actor)


@router.delete("/{exit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exit(
    exit_id: int,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_admin),
):
    movement_service.delete_exit(repo, exit_id, actor)


__all__ = ["router"]
