from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String

from warehouse.core.constants import REQUEST_PENDING
from warehouse.database.base import Base


class DeletionRequest(Base):
    __tablename__ = "deletion_requests"

    id = Column(Integer, primary_key=True)

    target_type = Column(String, nullable=False)  # 'PRODUCT' | 'LOCATION'
    target = Column(String, nullable=False)
    status = Column(String, nullable=False, default=REQUEST_PENDING)

    requested_by = Column(String, nullable=False)
    resolved_by = Column(String)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    resolved_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_deletion_requests_status", "status"),
    )


__all__ = ["DeletionRequest"]
