from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status

from warehouse.config import get_settings
from warehouse.core.constants import ROLE_ADMIN, ROLE_USER


@dataclass(frozen=True)
class Actor:
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def _parse_keys(raw: Optional[str], role: str) -> dict[str, Actor]:
    # Entries are "name:key" or a bare "key".
    keys = {}
    if not raw:
        return keys
    for value in raw.split(","):
        value = value.strip()
        if not value:
            continue
        name, sep, key = value.partition(":")
        if not sep:
            name, key = role.lower(), name
        name, key = name.strip(), key.strip()
        if key:
            keys[key] = Actor(name=name or role.lower(), role=role)
    return keys


def _load_api_keys() -> dict[str, Actor]:
    settings = get_settings()
    keys = _parse_keys(settings.USER_API_KEYS, ROLE_USER)
    keys.update(_parse_keys(settings.ADMIN_API_KEYS, ROLE_ADMIN))
    return keys


def authenticate_request(api_key: Optional[str], *, require_auth: bool = False) -> Actor:
    settings = get_settings()
    keys = _load_api_keys()

    if api_key:
        actor = keys.get(api_key.strip())
        if actor is not None:
            return actor

    if keys or require_auth or settings.AUTH_REQUIRED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return Actor(name=settings.LOCAL_ACTOR_NAME, role=ROLE_ADMIN)


def ensure_admin(actor: Actor) -> Actor:
    if not actor.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required",
        )
    return actor
