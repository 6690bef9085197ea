import logging
from datetime import datetime, timezone

from warehouse.core.constants import (
    DELETION_TARGETS,
    REQUEST_APPROVED,
    REQUEST_PENDING,
    REQUEST_REJECTED,
    TARGET_LOCATION,
    TARGET_PRODUCT,
)
from warehouse.core.errors import NotFound, ValidationError
from warehouse.core.validation import require_text
from warehouse.models.deletion_request import DeletionRequest
from warehouse.services.audit_service import record_action
from warehouse.services.location_service import drop_location, ensure_location_free
from warehouse.services.product_service import drop_product

logger = logging.getLogger(__name__)


def _actor_name(actor):
    return getattr(actor, "name", None) or str(actor or "system")


def _resolve_target(repo, target_type, target):
    if target_type == TARGET_PRODUCT:
        return repo.require_product(target).sku
    master = repo.get_master_location(target)
    if master is None:
        raise NotFound("Location {} is not registered".format(target))
    ensure_location_free(repo, master.name)
    return master.name


def request_deletion(repo, target_type, target, requested_by):
    """Queue a deletion for an administrator to approve.

    Locations must already be free when the request is made; the same check
    runs again on approval against the ledger at that time.
    """
    if target_type not in DELETION_TARGETS:
        raise ValidationError(
            "target_type must be one of: {}".format(", ".join(DELETION_TARGETS))
        )
    target = require_text(target, "target")
    with repo.transaction():
        target = _resolve_target(repo, target_type, target)
        if repo.find_pending_request(target_type, target) is not None:
            raise ValidationError("A deletion request for {} is already pending".format(target))
        request = repo.create_deletion_request(
            DeletionRequest(
                target_type=target_type,
                target=target,
                status=REQUEST_PENDING,
                requested_by=_actor_name(requested_by),
            )
        )
        record_action(
            repo,
            "SOLICITAR_EXCLUSAO",
            requested_by,
            "{} {}".format(target_type, target),
        )
    logger.info("Deletion of %s %s requested by %s", target_type, target, request.requested_by)
    return request


def _resolve_request(repo, request_id, status, actor):
    request = repo.require_deletion_request(request_id)
    if request.status != REQUEST_PENDING:
        raise ValidationError(
            "Request {} is already {}".format(request_id, request.status)
        )
    request.status = status
    request.resolved_by = _actor_name(actor)
    request.resolved_at = datetime.now(timezone.utc)
    return request


def approve_request(repo, request_id, actor):
    with repo.transaction():
        request = _resolve_request(repo, request_id, REQUEST_APPROVED, actor)
        if request.target_type == TARGET_PRODUCT:
            drop_product(repo, request.target, actor)
        elif request.target_type == TARGET_LOCATION:
            drop_location(repo, request.target, actor)
        repo.update_deletion_request(request)
        record_action(
            repo,
            "APROVAR_EXCLUSAO",
            actor,
            "Solicitação {}: {} {}".format(request.id, request.target_type, request.target),
        )
    logger.info("Deletion request %s approved", request_id)
    return request


def reject_request(repo, request_id, actor):
    with repo.transaction():
        request = _resolve_request(repo, request_id, REQUEST_REJECTED, actor)
        repo.update_deletion_request(request)
        record_action(
            repo,
            "REJEITAR_EXCLUSAO",
            actor,
            "Solicitação {}: {} {}".format(request.id, request.target_type, request.target),
        )
    logger.info("Deletion request %s rejected", request_id)
    return request


def pending_requests(repo):
    return repo.list_deletion_requests(status=REQUEST_PENDING)
