from fastapi import APIRouter, Depends, Query, status

from warehouse.core.security import Actor
from warehouse.dependencies import get_repository, require_actor, require_admin
from warehouse.schemas.admin import AuditLogCreate, AuditLogRead, DeletionRequestRead
from warehouse.services import audit_service, deletion_service
from warehouse.services.repository import InventoryRepository

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/deletion-requests", response_model=list[DeletionRequestRead])
def list_deletion_requests(
    repo: InventoryRepository = Depends(get_repository),
    _actor: Actor = Depends(require_admin),
):
    return deletion_service.pending_requests(repo)


@router.post("/deletion-requests/{request_id}/approve", response_model=DeletionRequestRead)
def approve_deletion_request(
    request_id: int,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_admin),
):
    return deletion_service.approve_request(repo, request_id, actor)


@router.post("/deletion-requests/{request_id}/reject", response_model=DeletionRequestRead)
def reject_deletion_request(
    request_id: int,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_admin),
):
    return deletion_service.reject_request(repo, request_id, actor)


@router.get("/audit-logs", response_model=list[AuditLogRead])
def list_audit_logs(
    limit: int = Query(500, ge=1, le=5000, description="Max records to return"),
    repo: InventoryRepository = Depends(get_repository),
    _actor: Actor = Depends(require_admin),
):
    return audit_service.list_audit_logs(repo, limit=limit)


@router.post("/audit-log", response_model=AuditLogRead, status_code=status.HTTP_201_CREATED)
def create_audit_log(
    payload: AuditLogCreate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return audit_service.log_action(repo, payload.action_type, actor, payload.details)


__all__ = ["router"]
