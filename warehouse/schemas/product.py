from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    name: str
    brand: str
    color: Optional[str] = None
    supplier: Optional[str] = ""
    cost_price: Decimal = Field(gt=0)
    units_per_box: int = Field(1, ge=1)
    repurchase_threshold: int = Field(0, ge=0)
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    sku: str


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    supplier: Optional[str] = None
    cost_price: Optional[Decimal] = Field(None, gt=0)
    units_per_box: Optional[int] = Field(None, ge=1)
    repurchase_threshold: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None


class ProductClone(ProductUpdate):
    sku: str


class PriceHistoryRead(BaseModel):
    last_edit_date: Optional[date] = None
    previous_price: Decimal
    best_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class ProductRead(ProductBase):
    id: int
    sku: str
    quantity: int = 0
    created_at: datetime
    history: PriceHistoryRead = Field(
        validation_alias=AliasChoices("history", "price_history"),
    )

    model_config = ConfigDict(from_attributes=True)


class ProductPriceHistory(BaseModel):
    sku: str
    cost_price: Decimal
    history: PriceHistoryRead
