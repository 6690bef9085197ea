from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from warehouse.core.constants import TARGET_PRODUCT
from warehouse.core.security import Actor
from warehouse.dependencies import get_repository, require_actor, require_admin
from warehouse.schemas.admin import DeletionRequestRead
from warehouse.schemas.product import (
    PriceHistoryRead,
    ProductClone,
    ProductCreate,
    ProductPriceHistory,
    ProductRead,
    ProductUpdate,
)
from warehouse.services import deletion_service, product_service
from warehouse.services.repository import InventoryRepository

router = APIRouter(prefix="/products", tags=["Products"])


def _product_read(product, quantity) -> ProductRead:
    base = ProductRead.model_validate(product)
    return base.model_copy(update={"quantity": quantity})


@router.get("", response_model=list[ProductRead])
def list_products(
    query: Optional[str] = Query(None, description="Name, brand or SKU"),
    repo: InventoryRepository = Depends(get_repository),
):
    return [
        _product_read(product, quantity)
        for product, quantity in product_service.products_with_quantity(repo, query=query)
    ]


@router.get("/{sku}", response_model=ProductRead)
def get_product(sku: str, repo: InventoryRepository = Depends(get_repository)):
    product, quantity = product_service.get_product_with_quantity(repo, sku)
    return _product_read(product, quantity)


@router.get("/{sku}/history", response_model=ProductPriceHistory)
def get_price_history(sku: str, repo: InventoryRepository = Depends(get_repository)):
    product, history = product_service.price_history(repo, sku)
    return ProductPriceHistory(
        sku=product.sku,
        cost_price=product.cost_price,
        history=PriceHistoryRead.model_validate(history),
    )


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    fields = payload.model_dump(exclude={"sku"})
    product = product_service.create_product(repo, payload.sku, actor, **fields)
    return _product_read(product, 0)


@router.put("/{sku}", response_model=ProductRead)
def edit_product(
    sku: str,
    payload: ProductUpdate,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    product_service.edit_product(repo, sku, actor, **payload.model_dump(exclude_unset=True))
    product, quantity = product_service.get_product_with_quantity(repo, sku)
    return _product_read(product, quantity)


@router.post("/{sku}/clone", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def clone_product(
    sku: str,
    payload: ProductClone,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    overrides = payload.model_dump(exclude={"sku"}, exclude_unset=True)
    product = product_service.clone_product(repo, sku, payload.sku, actor, **overrides)
    return _product_read(product, 0)


@router.delete("/{sku}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    sku: str,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_admin),
):
    product_service.delete_product(repo, sku, actor)


@router.post(
    "/{sku}/request-deletion",
    response_model=DeletionRequestRead,
    status_code=status.HTTP_201_CREATED,
)
def request_product_deletion(
    sku: str,
    repo: InventoryRepository = Depends(get_repository),
    actor: Actor = Depends(require_actor),
):
    return deletion_service.request_deletion(repo, TARGET_PRODUCT, sku, actor)


__all__ = ["router"]
