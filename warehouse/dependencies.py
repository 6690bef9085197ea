from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from warehouse.config import get_settings
from warehouse.core.security import Actor, authenticate_request, ensure_admin
from warehouse.database.session import get_db
from warehouse.services.repository import InventoryRepository


def get_repository(db: Session = Depends(get_db)) -> InventoryRepository:
    return InventoryRepository(db)


def require_actor(
    api_key: Optional[str] = Header(None, alias=get_settings().API_KEY_HEADER),
    api_key_alt: Optional[str] = Header(None, alias="api-key"),
) -> Actor:
    return authenticate_request(api_key or api_key_alt)


def require_admin(actor: Actor = Depends(require_actor)) -> Actor:
    return ensure_admin(actor)


__all__ = ["get_db", "get_repository", "require_actor", "require_admin"]
