"""
Stock movements against the location ledger.

``move_volume`` splits boxes from one entry into another location and
``create_exit`` takes boxes out of the warehouse, appending an exit record.
Both run as a single transaction: the source decrement, the destination
entry (or exit record) and the audit entry commit together or not at all.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from warehouse.core.constants import EXIT_TYPE_FULL, EXIT_TYPES, STORES
from warehouse.core.errors import MissingStore, ValidationError
from warehouse.core.ledger import normalize_location_name
from warehouse.core.validation import optional_text, require_text, require_volume
from warehouse.models.exit import ProductExit
from warehouse.models.location import ProductLocation
from warehouse.services.audit_service import record_action
from warehouse.services.location_service import register_location

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    source: Optional[ProductLocation]
    destination: ProductLocation
    volume: int


@dataclass
class ExitResult:
    exit: ProductExit
    source: Optional[ProductLocation]


def _validate_exit_target(exit_type, store):
    if exit_type not in EXIT_TYPES:
        raise ValidationError(
            "exit_type must be one of: {}".format(", ".join(EXIT_TYPES))
        )
    store = optional_text(store)
    if exit_type != EXIT_TYPE_FULL:
        return None
    if store is None:
        raise MissingStore("A store is required for Full exits")
    if store not in STORES:
        raise ValidationError("store must be one of: {}".format(", ".join(STORES)))
    return store


def move_volume(repo, source_id, destination, volume, actor=None) -> MoveResult:
    destination = require_text(destination, "destination")
    with repo.transaction():
        source = repo.require_location_entry(source_id)
        volume = require_volume(volume, source.volume)

        if normalize_location_name(source.location) == normalize_location_name(destination):
            return MoveResult(source=source, destination=source, volume=volume)

        sku = source.sku
        name = source.name
        units_per_box = source.units_per_box
        origin = source.location

        remaining = repo.decrement_volume(source, volume)

        target = repo.find_location_entry(sku, destination, units_per_box, exclude_id=source_id)
        if target is not None:
            repo.increment_volume(target, volume, date.today())
        else:
            target = repo.create_location_entry(
                ProductLocation(
                    sku=sku,
                    name=name,
                    location=destination,
                    volume=volume,
                    units_per_box=units_per_box,
                    date=date.today(),
                )
            )

        register_location(repo, destination)
        record_action(
            repo,
            "MOVER_PRODUTO",
            actor,
            "{} caixas de {} de {} para {}".format(volume, sku, origin, destination),
        )

    logger.info(
        "Moved %s boxes of %s from %s to %s (%s left at source)",
        volume,
        sku,
        origin,
        destination,
        remaining,
    )
    return MoveResult(source=source if remaining else None, destination=target, volume=volume)


def create_exit(
    repo,
    source_id,
    exit_type,
    volume,
    *,
    store=None,
    observation=None,
    actor=None,
) -> ExitResult:
    store = _validate_exit_target(exit_type, store)
    with repo.transaction():
        source = repo.require_location_entry(source_id)
        volume = require_volume(volume, source.volume)

        record = repo.create_exit(
            ProductExit(
                sku=source.sku,
                name=source.name,
                quantity=volume * source.units_per_box,
                date=date.today(),
                exit_type=exit_type,
                store=store,
                observation=(observation or "").strip(),
            )
        )
        remaining = repo.decrement_volume(source, volume)
        record_action(
            repo,
            "CRIAR_SAIDA",
            actor,
            "{} unidades de {} ({}{})".format(
                record.quantity,
                record.sku,
                exit_type,
                " - {}".format(store) if store else "",
            ),
        )

    logger.info(
        "Exit of %s units of %s via %s (%s boxes left at %s)",
        record.quantity,
        record.sku,
        exit_type,
        remaining,
        source.location,
    )
    return ExitResult(exit=record, source=source if remaining else None)


def update_exit_observation(repo, exit_id, observation, actor=None) -> ProductExit:
    """Rewrite the observation; quantity, date, type and store never change."""
    observation = (observation or "").strip()
    with repo.transaction():
        record = repo.require_exit(exit_id)
        repo.update_exit_observation(record, observation)
        record_action(repo, "EDITAR_OBSERVACAO_SAIDA", actor, "Saída {}".format(exit_id))
    return record


def delete_exit(repo, exit_id, actor=None) -> None:
    """Remove an exit record. The stock it consumed is not returned to the ledger."""
    with repo.transaction():
        record = repo.require_exit(exit_id)
        details = "Saída {}: {} unidades de {}".format(exit_id, record.quantity, record.sku)
        repo.delete_exit(record)
        record_action(repo, "EXCLUIR_SAIDA", actor, details)


def list_exits(repo, query=None):
    return repo.list_exits(query=query)
