import logging
from datetime import date

from warehouse.core.errors import LocationOccupied, NotFound, ValidationError
from warehouse.core.ledger import availability, is_occupied
from warehouse.core.validation import require_int, require_text
from warehouse.models.location import ProductLocation
from warehouse.services.audit_service import record_action

logger = logging.getLogger(__name__)


def register_location(repo, name):
    """Idempotent insert into the master registry; returns the registered row.

    Runs inside the caller's transaction.
    """
    name = require_text(name, "location")
    master = repo.get_master_location(name)
    if master is not None:
        return master
    master = repo.add_master_location(name)
    logger.info("Registered master location %s", name)
    return master


def add_master_location(repo, name, actor=None):
    with repo.transaction():
        existing = repo.get_master_location(require_text(name, "location"))
        master = register_location(repo, name)
        if existing is None:
            record_action(repo, "CRIAR_LOCALIZACAO", actor, "Localização {}".format(master.name))
    return master


def ensure_location_free(repo, name):
    if is_occupied(name, repo.list_locations()):
        logger.warning("Rejected removal of occupied location %s", name)
        raise LocationOccupied(
            "Location {} still holds stock; exit its products first".format(name)
        )


def drop_location(repo, name, actor=None):
    master = repo.get_master_location(name)
    if master is None:
        raise NotFound("Location {} is not registered".format(name))
    ensure_location_free(repo, master.name)
    repo.remove_master_location(master)
    record_action(repo, "EXCLUIR_LOCALIZACAO", actor, "Localização {}".format(master.name))
    return master


def remove_location(repo, name, actor=None):
    """Permanently drop ``name`` from the registry when no stock sits there."""
    name = require_text(name, "location")
    with repo.transaction():
        drop_location(repo, name, actor)


def location_availability(repo, query=None):
    return availability(repo.list_master_locations(query=query), repo.list_locations())


def list_location_entries(repo, query=None):
    return repo.list_locations(query=query)


def add_location_entry(repo, sku, location, volume, *, entry_date=None, actor=None):
    """Shelve ``volume`` boxes of ``sku`` at ``location``.

    The box size is copied from the product at this moment. Stock joining an
    entry of the same SKU, location and box size is merged into it.
    """
    location = require_text(location, "location")
    volume = require_int(volume, "volume", minimum=1)
    with repo.transaction():
        product = repo.require_product(require_text(sku, "sku"))
        units_per_box = product.units_per_box or 1
        entry = repo.find_location_entry(product.sku, location, units_per_box)
        if entry is not None:
            repo.increment_volume(entry, volume, entry_date or date.today())
        else:
            entry = repo.create_location_entry(
                ProductLocation(
                    sku=product.sku,
                    name=product.name,
                    location=location,
                    volume=volume,
                    units_per_box=units_per_box,
                    date=entry_date or date.today(),
                )
            )
        register_location(repo, location)
        record_action(
            repo,
            "ADICIONAR_LOCALIZACAO",
            actor,
            "{} caixas de {} em {}".format(volume, product.sku, location),
        )
    return entry


def update_location_entry(repo, entry_id, *, volume=None, location=None, actor=None):
    """Direct correction of an entry; a volume of 0 removes it from the ledger.

    Relocating onto an entry of the same SKU and box size folds this entry
    into that one, which is returned instead.
    """
    if volume is None and location is None:
        raise ValidationError("Nothing to update")
    if location is not None:
        location = require_text(location, "location")
    if volume is not None:
        volume = require_int(volume, "volume", minimum=0)
    with repo.transaction():
        entry = repo.require_location_entry(entry_id)
        if volume == 0:
            repo.delete_location_entry(entry)
            record_action(repo, "EXCLUIR_LOCALIZACAO_PRODUTO", actor, "Entrada {}".format(entry_id))
            return None
        if location is not None:
            register_location(repo, location)
            target = repo.find_location_entry(
                entry.sku, location, entry.units_per_box, exclude_id=entry.id
            )
            if target is not None:
                boxes = volume if volume is not None else entry.volume
                repo.delete_location_entry(entry)
                repo.increment_volume(target, boxes, date.today())
                record_action(
                    repo,
                    "EDITAR_LOCALIZACAO_PRODUTO",
                    actor,
                    "Entrada {} unida a {}".format(entry_id, target.id),
                )
                return target
            entry.location = location
        if volume is not None:
            entry.volume = volume
        entry.date = date.today()
        repo.update_location_entry(entry)
        record_action(repo, "EDITAR_LOCALIZACAO_PRODUTO", actor, "Entrada {}".format(entry_id))
    return entry


def delete_location_entry(repo, entry_id, actor=None):
    with repo.transaction():
        entry = repo.require_location_entry(entry_id)
        details = "{} ({}) em {}".format(entry.sku, entry.volume, entry.location)
        repo.delete_location_entry(entry)
        record_action(repo, "EXCLUIR_LOCALIZACAO_PRODUTO", actor, details)
