import logging
from datetime import date, datetime, timezone

from warehouse.core.errors import DuplicateSku, LocationOccupied, ValidationError
from warehouse.core.ledger import quantities_by_sku, normalize_sku
from warehouse.core.price_rules import initial_price_history, next_price_history
from warehouse.core.validation import (
    optional_text,
    require_int,
    require_positive_price,
    require_text,
)
from warehouse.models.product import Product
from warehouse.services.audit_service import record_action

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "brand",
    "color",
    "supplier",
    "cost_price",
    "units_per_box",
    "repurchase_threshold",
    "image_url",
)


def _clean_fields(fields, *, partial=False):
    """Validate product fields; with ``partial`` only the given keys are checked."""
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown product fields: {}".format(", ".join(sorted(unknown))))

    cleaned = {}
    for field in ("name", "brand"):
        if field in fields or not partial:
            cleaned[field] = require_text(fields.get(field), field)
    for field in ("color", "image_url"):
        if field in fields:
            cleaned[field] = optional_text(fields[field])
    if "supplier" in fields or not partial:
        cleaned["supplier"] = optional_text(fields.get("supplier")) or ""
    if "cost_price" in fields or not partial:
        cleaned["cost_price"] = require_positive_price(fields.get("cost_price"))
    if "units_per_box" in fields or not partial:
        value = fields.get("units_per_box")
        cleaned["units_per_box"] = require_int(1 if value is None else value, "units_per_box", minimum=1)
    if "repurchase_threshold" in fields or not partial:
        value = fields.get("repurchase_threshold")
        cleaned["repurchase_threshold"] = require_int(
            0 if value is None else value, "repurchase_threshold", minimum=0
        )
    return cleaned


def _apply_price_history(product, cleaned, edited_on):
    new_price = cleaned.get("cost_price")
    if new_price is None:
        product.last_edit_date = edited_on
        return
    product.price_history = next_price_history(
        product.price_history if product.best_price is not None else None,
        product.cost_price,
        new_price,
        edited_on,
    )


def _insert_product(repo, sku, cleaned, actor, action_type):
    if repo.get_product(sku) is not None:
        logger.warning("Rejected duplicate SKU %s", sku)
        raise DuplicateSku("SKU {} already exists".format(sku))
    product = Product(sku=sku, **cleaned)
    product.price_history = initial_price_history(cleaned["cost_price"], date.today())
    product.created_at = datetime.now(timezone.utc)
    repo.create_product(product)
    record_action(repo, action_type, actor, "Produto {}".format(sku))
    return product


def create_product(repo, sku, actor=None, **fields):
    sku = require_text(sku, "sku")
    cleaned = _clean_fields(fields)
    with repo.transaction():
        product = _insert_product(repo, sku, cleaned, actor, "CRIAR_PRODUTO")
    logger.info("Created product %s", sku)
    return product


def edit_product(repo, sku, actor=None, *, edited_on=None, **changes):
    """Apply ``changes`` to a product. The SKU itself cannot be edited."""
    cleaned = _clean_fields(changes, partial=True)
    edited_on = edited_on or date.today()
    with repo.transaction():
        product = repo.require_product(sku)
        _apply_price_history(product, cleaned, edited_on)
        for field, value in cleaned.items():
            setattr(product, field, value)
        repo.update_product(product)
        record_action(repo, "EDITAR_PRODUTO", actor, "Produto {}".format(product.sku))
    logger.info("Edited product %s", product.sku)
    return product


def clone_product(repo, source_sku, new_sku, actor=None, **overrides):
    """Copy a product under a new SKU with a fresh price history."""
    new_sku = require_text(new_sku, "sku")
    with repo.transaction():
        source = repo.require_product(source_sku)
        fields = {field: getattr(source, field) for field in EDITABLE_FIELDS}
        fields.update(overrides)
        cleaned = _clean_fields(fields)
        product = _insert_product(repo, new_sku, cleaned, actor, "CLONAR_PRODUTO")
    logger.info("Cloned product %s into %s", source_sku, new_sku)
    return product


def ensure_product_unstocked(repo, product):
    if repo.list_locations(sku=product.sku):
        raise LocationOccupied(
            "Product {} still has stock in locations; exit it first".format(product.sku)
        )


def drop_product(repo, sku, actor=None):
    product = repo.require_product(sku)
    ensure_product_unstocked(repo, product)
    repo.delete_product(product)
    record_action(repo, "EXCLUIR_PRODUTO", actor, "Produto {}".format(product.sku))
    return product


def delete_product(repo, sku, actor=None):
    with repo.transaction():
        product = drop_product(repo, sku, actor)
    logger.info("Deleted product %s", product.sku)


def get_product_with_quantity(repo, sku):
    product = repo.require_product(sku)
    totals = quantities_by_sku(repo.list_locations(sku=product.sku))
    return product, totals.get(normalize_sku(product.sku), 0)


def products_with_quantity(repo, query=None):
    totals = quantities_by_sku(repo.list_locations())
    return [
        (product, totals.get(normalize_sku(product.sku), 0))
        for product in repo.list_products(query=query)
    ]


def price_history(repo, sku):
    product = repo.require_product(sku)
    return product, product.price_history
