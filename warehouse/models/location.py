from datetime import date

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, String

from warehouse.core.ledger import entry_quantity
from warehouse.database.base import Base


class ProductLocation(Base):
    __tablename__ = "product_locations"

    id = Column(Integer, primary_key=True)

    sku = Column(String, nullable=False)
    name = Column(String, nullable=False)
    location = Column(String, nullable=False)

    volume = Column(Integer, nullable=False)
    # Box size at the time the stock was shelved; not updated from the product.
    units_per_box = Column(Integer, nullable=False, default=1)

    date = Column(Date, nullable=False, default=date.today)

    __table_args__ = (
        CheckConstraint("volume > 0", name="ck_product_locations_volume_positive"),
        Index("idx_product_locations_sku", "sku"),
        Index("idx_product_locations_location", "location"),
    )

    @property
    def quantity(self) -> int:
        return entry_quantity(self)


__all__ = ["ProductLocation"]
