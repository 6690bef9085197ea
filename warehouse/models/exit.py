from datetime import date

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, String, Text

from warehouse.database.base import Base


class ProductExit(Base):
    __tablename__ = "product_exits"

    id = Column(Integer, primary_key=True)

    sku = Column(String, nullable=False)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, default=date.today)

    exit_type = Column(String, nullable=False)
    store = Column(String)
    observation = Column(Text, nullable=False, default="")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_product_exits_quantity_positive"),
        Index("idx_product_exits_sku", "sku"),
    )


__all__ = ["ProductExit"]
