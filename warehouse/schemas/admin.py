from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DeletionRequestRead(BaseModel):
    id: int
    target_type: str
    target: str
    status: str
    requested_by: str
    resolved_by: Optional[str] = None
    created_at: datetime
    resolved_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuditLogCreate(BaseModel):
    action_type: str
    details: Optional[str] = None


class AuditLogRead(BaseModel):
    id: int
    action_type: str
    actor: str
    details: Optional[str] = None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
