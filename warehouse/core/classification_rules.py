from dataclasses import dataclass
from datetime import date
from typing import Optional

from warehouse.core.constants import (
    STAGNANT_AFTER_DAYS,
    STATUS_OK,
    STATUS_REPURCHASE,
    STATUS_STAGNANT,
)
from warehouse.core.dates import normalize_date
from warehouse.core.ledger import (
    entries_for_sku,
    exits_for_sku,
    quantity_of,
    total_exit_quantity,
)


@dataclass(frozen=True)
class Classification:
    sku: str
    status: str
    quantity: int
    suggestion: int = 0
    days_since_last_movement: int = 0


def needs_repurchase(quantity, threshold):
    threshold = int(threshold or 0)
    return threshold > 0 and quantity <= threshold


def repurchase_suggestion(threshold, total_exits, quantity):
    return max(0, int(threshold or 0) + int(total_exits or 0) - int(quantity or 0))


def last_movement_date(dates):
    parsed = [value for value in (normalize_date(item) for item in dates) if value is not None]
    if not parsed:
        return None
    return max(parsed)


def days_since_last_movement(dates, today: Optional[date] = None):
    last = last_movement_date(dates)
    if last is None:
        return None
    today = normalize_date(today) or date.today()
    return abs((today - last).days)


def classify(
    sku,
    quantity,
    threshold,
    movement_dates,
    total_exits=0,
    *,
    today: Optional[date] = None,
    stagnant_after_days: int = STAGNANT_AFTER_DAYS,
) -> Classification:
    # Repurchase wins over stagnation: a product lands in exactly one bucket.
    if needs_repurchase(quantity, threshold):
        return Classification(
            sku=sku,
            status=STATUS_REPURCHASE,
            quantity=quantity,
            suggestion=repurchase_suggestion(threshold, total_exits, quantity),
        )

    if quantity > 0:
        idle_days = days_since_last_movement(movement_dates, today)
        if idle_days is not None:
            status = STATUS_STAGNANT if idle_days > stagnant_after_days else STATUS_OK
            return Classification(
                sku=sku,
                status=status,
                quantity=quantity,
                days_since_last_movement=idle_days,
            )

    return Classification(sku=sku, status=STATUS_OK, quantity=quantity)


def classify_product(
    product,
    locations,
    exits,
    *,
    today: Optional[date] = None,
    stagnant_after_days: int = STAGNANT_AFTER_DAYS,
) -> Classification:
    sku = product.sku
    sku_locations = entries_for_sku(sku, locations)
    sku_exits = exits_for_sku(sku, exits)
    movement_dates = [entry.date for entry in sku_locations] + [item.date for item in sku_exits]
    return classify(
        sku,
        quantity_of(sku, sku_locations),
        product.repurchase_threshold,
        movement_dates,
        total_exit_quantity(sku, sku_exits),
        today=today,
        stagnant_after_days=stagnant_after_days,
    )


def classify_snapshot(snapshot, *, today=None, stagnant_after_days=STAGNANT_AFTER_DAYS):
    return [
        classify_product(
            product,
            snapshot.locations,
            snapshot.exits,
            today=today,
            stagnant_after_days=stagnant_after_days,
        )
        for product in snapshot.products
    ]
