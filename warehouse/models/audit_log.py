from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from warehouse.database.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    action_type = Column(String, nullable=False)
    actor = Column(String, nullable=False)
    details = Column(Text)
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_audit_logs_timestamp", "timestamp"),
    )


__all__ = ["AuditLog"]
