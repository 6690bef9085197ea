import logging

from warehouse.core.validation import require_text
from warehouse.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def _actor_name(actor):
    if actor is None:
        return "system"
    return getattr(actor, "name", None) or str(actor)


def record_action(repo, action_type, actor=None, details=None):
    """Append an audit entry inside the caller's transaction."""
    actor_name = _actor_name(actor)
    entry = repo.add_audit_log(
        AuditLog(action_type=action_type, actor=actor_name, details=details)
    )
    logger.info(
        "%s by %s: %s",
        action_type,
        actor_name,
        details or "-",
        extra={"actor": actor_name},
    )
    return entry


def list_audit_logs(repo, limit=500):
    return repo.list_audit_logs(limit=limit)


def log_action(repo, action_type, actor=None, details=None):
    """Standalone audit entry, e.g. a user asking an admin for a report export."""
    action_type = require_text(action_type, "action_type")
    with repo.transaction():
        entry = record_action(repo, action_type, actor, details)
    return entry
