from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PriceHistory:
    last_edit_date: Optional[date]
    previous_price: Decimal
    best_price: Decimal


def _as_price(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def initial_price_history(cost_price, edited_on: Optional[date] = None) -> PriceHistory:
    price = _as_price(cost_price)
    return PriceHistory(
        last_edit_date=edited_on or date.today(),
        previous_price=price,
        best_price=price,
    )


def next_price_history(
    history: Optional[PriceHistory],
    current_price,
    new_price,
    edited_on: Optional[date] = None,
) -> PriceHistory:
    """History after replacing ``current_price`` with ``new_price``.

    ``best_price`` is a running minimum across every price the product has
    held, so it never increases. A missing history falls back to the price
    being replaced.
    """
    current_price = _as_price(current_price)
    new_price = _as_price(new_price)
    best = history.best_price if history is not None and history.best_price is not None else current_price
    return PriceHistory(
        last_edit_date=edited_on or date.today(),
        previous_price=current_price,
        best_price=min(_as_price(best), new_price),
    )
