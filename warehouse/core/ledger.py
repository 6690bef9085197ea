"""
Pure reductions over the location ledger.

Entries are read through attributes only (``sku``, ``location``, ``volume``,
``units_per_box``, ``quantity``), so ORM rows, pydantic models and plain
namespaces are all accepted. Nothing here touches the database.
"""

from typing import Iterable, NamedTuple

from warehouse.core.constants import LOCATION_FREE, LOCATION_OCCUPIED


class LedgerSnapshot(NamedTuple):
    products: tuple
    locations: tuple
    exits: tuple

    @classmethod
    def build(cls, products=(), locations=(), exits=()):
        return cls(tuple(products), tuple(locations), tuple(exits))


def normalize_sku(sku) -> str:
    return str(sku or "").strip().lower()


def normalize_location_name(name) -> str:
    return " ".join(str(name or "").split()).casefold()


def entries_for_sku(sku, locations: Iterable) -> list:
    key = normalize_sku(sku)
    return [entry for entry in locations if normalize_sku(entry.sku) == key]


def exits_for_sku(sku, exits: Iterable) -> list:
    key = normalize_sku(sku)
    return [item for item in exits if normalize_sku(item.sku) == key]


def entry_quantity(entry) -> int:
    return int(entry.volume or 0) * int(entry.units_per_box or 1)


def quantity_of(sku, locations: Iterable) -> int:
    """Units on hand for ``sku``: sum of volume x units-per-box, 0 when absent."""
    return sum(entry_quantity(entry) for entry in entries_for_sku(sku, locations))


def total_exit_quantity(sku, exits: Iterable) -> int:
    return sum(int(item.quantity or 0) for item in exits_for_sku(sku, exits))


def quantities_by_sku(locations: Iterable) -> dict:
    totals = {}
    for entry in locations:
        key = normalize_sku(entry.sku)
        totals[key] = totals.get(key, 0) + entry_quantity(entry)
    return totals


def occupied_location_names(locations: Iterable) -> set:
    return {
        normalize_location_name(entry.location)
        for entry in locations
        if entry.volume and normalize_location_name(entry.location)
    }


def is_occupied(name, locations: Iterable) -> bool:
    return normalize_location_name(name) in occupied_location_names(locations)


def availability(master_locations: Iterable, locations: Iterable) -> list:
    occupied = occupied_location_names(locations)
    results = []
    for master in master_locations:
        name = master if isinstance(master, str) else master.name
        results.append(
            {
                "location": name,
                "status": LOCATION_OCCUPIED
                if normalize_location_name(name) in occupied
                else LOCATION_FREE,
            }
        )
    return results


__all__ = [
    "LedgerSnapshot",
    "availability",
    "entries_for_sku",
    "entry_quantity",
    "exits_for_sku",
    "is_occupied",
    "normalize_location_name",
    "normalize_sku",
    "occupied_location_names",
    "quantities_by_sku",
    "quantity_of",
    "total_exit_quantity",
]
