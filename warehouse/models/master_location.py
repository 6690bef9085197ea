from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from warehouse.database.base import Base


class MasterLocation(Base):
    __tablename__ = "master_locations"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    name_key = Column(String, nullable=False, unique=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


__all__ = ["MasterLocation"]
