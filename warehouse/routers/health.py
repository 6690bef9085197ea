import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from warehouse.config import get_settings
from warehouse.core.errors import CollaboratorUnavailable
from warehouse.dependencies import get_repository
from warehouse.services.repository import InventoryRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(repo: InventoryRepository = Depends(get_repository)):
    settings = get_settings()
    try:
        repo.ping()
        database = "ok"
    except CollaboratorUnavailable:
        logger.warning("Health check could not reach the database")
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "database": database,
        "time": datetime.now(timezone.utc).isoformat(),
    }
