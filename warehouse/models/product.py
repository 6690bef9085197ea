from datetime import date, datetime, timezone

from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric, String

from warehouse.core.price_rules import PriceHistory
from warehouse.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)

    sku = Column(String, nullable=False)
    # lower(sku), the identity key used for lookups and uniqueness.
    sku_key = Column(String, nullable=False, unique=True)

    name = Column(String, nullable=False)
    brand = Column(String, nullable=False)
    color = Column(String)
    supplier = Column(String, nullable=False, default="")
    image_url = Column(String)

    cost_price = Column(Numeric(12, 2), nullable=False)
    units_per_box = Column(Integer, nullable=False, default=1)
    repurchase_threshold = Column(Integer, nullable=False, default=0)

    last_edit_date = Column(Date, nullable=False, default=date.today)
    previous_price = Column(Numeric(12, 2), nullable=False)
    best_price = Column(Numeric(12, 2), nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_products_name", "name"),
    )

    @property
    def price_history(self) -> PriceHistory:
        return PriceHistory(
            last_edit_date=self.last_edit_date,
            previous_price=self.previous_price,
            best_price=self.best_price,
        )

    @price_history.setter
    def price_history(self, history: PriceHistory) -> None:
        self.last_edit_date = history.last_edit_date
        self.previous_price = history.previous_price
        self.best_price = history.best_price


__all__ = ["Product"]
