from datetime import date

from warehouse.config import get_settings
from warehouse.core.classification_rules import classify_snapshot
from warehouse.core.constants import (
    EXIT_TYPE_FULL,
    EXIT_TYPE_SHIPMENT,
    STATUS_OK,
    STATUS_REPURCHASE,
    STATUS_STAGNANT,
    STORES,
)
from warehouse.core.ledger import normalize_sku


def _normalize_store_filters(store_filters):
    if not store_filters:
        return []
    raw_values = store_filters.split(",") if isinstance(store_filters, str) else store_filters
    by_key = {store.lower(): store for store in STORES}
    normalized = []
    for entry in raw_values:
        store = by_key.get(str(entry).strip().lower())
        if store and store not in normalized:
            normalized.append(store)
    return normalized


def _product_row(product, classification):
    return {
        "sku": product.sku,
        "name": product.name,
        "brand": product.brand,
        "supplier": product.supplier,
        "repurchase_threshold": product.repurchase_threshold,
        "current_quantity": classification.quantity,
    }


def inventory_status(repo, today=None):
    """Classify every product as OK, needing repurchase or stagnant.

    Recomputed from the ledger on every call.
    """
    settings = get_settings()
    today = today or date.today()
    snapshot = repo.snapshot()
    products_by_sku = {normalize_sku(product.sku): product for product in snapshot.products}

    repurchase = []
    stagnant = []
    counts = {STATUS_OK: 0, STATUS_REPURCHASE: 0, STATUS_STAGNANT: 0}

    for classification in classify_snapshot(
        snapshot,
        today=today,
        stagnant_after_days=settings.STAGNANT_AFTER_DAYS,
    ):
        counts[classification.status] += 1
        product = products_by_sku[normalize_sku(classification.sku)]
        if classification.status == STATUS_REPURCHASE:
            row = _product_row(product, classification)
            row["suggestion"] = classification.suggestion
            repurchase.append(row)
        elif classification.status == STATUS_STAGNANT:
            row = _product_row(product, classification)
            row["days_since_last_movement"] = classification.days_since_last_movement
            stagnant.append(row)

    repurchase.sort(key=lambda item: (-item["suggestion"], item["sku"]))
    stagnant.sort(key=lambda item: (-item["days_since_last_movement"], item["sku"]))

    return {
        "date": today,
        "product_count": len(snapshot.products),
        "status_counts": counts,
        "repurchase": repurchase,
        "stagnant": stagnant,
    }


def exit_summary(repo, store_filters=None):
    """Units shipped per exit type, plus per-store totals for Full exits."""
    exits = repo.list_exits()
    stores = _normalize_store_filters(store_filters)

    total_shipment = sum(item.quantity for item in exits if item.exit_type == EXIT_TYPE_SHIPMENT)
    full_exits = [item for item in exits if item.exit_type == EXIT_TYPE_FULL]
    results = [
        {"name": EXIT_TYPE_SHIPMENT, "quantity": total_shipment},
        {"name": "Full (Total)", "quantity": sum(item.quantity for item in full_exits)},
    ]
    for store in stores:
        results.append(
            {
                "name": store,
                "quantity": sum(item.quantity for item in full_exits if item.store == store),
            }
        )
    return {"count": len(exits), "results": results}
