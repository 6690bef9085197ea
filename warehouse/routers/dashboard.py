from fastapi import APIRouter, Depends

from warehouse.core.security import Actor
from warehouse.dependencies import get_repository, require_admin
from warehouse.services.dashboard_service import inventory_status
from warehouse.services.repository import InventoryRepository

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/inventory-status")
def inventory_status_summary(
    repo: InventoryRepository = Depends(get_repository),
    _actor: Actor = Depends(require_admin),
):
    return inventory_status(repo)


__all__ = ["router"]
