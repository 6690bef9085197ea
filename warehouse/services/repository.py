"""
SQLAlchemy-backed persistence collaborator.

Services never touch the session directly: every read and write goes through
``InventoryRepository`` and every mutation runs inside ``transaction()`` so a
failed operation leaves the ledger exactly as it was.
"""

import functools
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from warehouse.core.constants import REQUEST_PENDING
from warehouse.core.errors import (
    CollaboratorUnavailable,
    DuplicateSku,
    InvalidVolume,
    InventoryError,
    NotFound,
)
from warehouse.core.ledger import LedgerSnapshot, normalize_location_name, normalize_sku
from warehouse.models.audit_log import AuditLog
from warehouse.models.deletion_request import DeletionRequest
from warehouse.models.exit import ProductExit
from warehouse.models.location import ProductLocation
from warehouse.models.master_location import MasterLocation
from warehouse.models.product import Product

logger = logging.getLogger(__name__)


def _storage_call(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Storage call %s failed", method.__name__)
            raise CollaboratorUnavailable(
                "Storage unavailable during {}".format(method.__name__)
            ) from exc

    return wrapper


def _like(query):
    return "%{}%".format(str(query).strip())


class InventoryRepository:
    def __init__(self, db: Session):
        self.db = db

    # ==============================
    # Transactions
    # ==============================
    @contextmanager
    def transaction(self):
        try:
            yield self
            self.db.commit()
        except InventoryError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Transaction rolled back")
            raise CollaboratorUnavailable("Storage unavailable, nothing was changed") from exc
        except Exception:
            self.db.rollback()
            raise

    @_storage_call
    def ping(self) -> None:
        self.db.execute(select(1))

    # ==============================
    # Snapshot
    # ==============================
    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot.build(
            products=self.list_products(),
            locations=self.list_locations(),
            exits=self.list_exits(),
        )

    # ==============================
    # Products
    # ==============================
    @_storage_call
    def list_products(self, query: Optional[str] = None) -> list[Product]:
        stmt = select(Product).order_by(Product.name, Product.sku)
        if query:
            pattern = _like(query)
            stmt = stmt.where(
                or_(
                    Product.name.ilike(pattern),
                    Product.brand.ilike(pattern),
                    Product.sku.ilike(pattern),
                )
            )
        return list(self.db.execute(stmt).scalars().all())

    @_storage_call
    def get_product(self, sku) -> Optional[Product]:
        return (
            self.db.execute(select(Product).where(Product.sku_key == normalize_sku(sku)))
            .scalars()
            .first()
        )

    def require_product(self, sku) -> Product:
        product = self.get_product(sku)
        if product is None:
            raise NotFound("Product {} not found".format(sku))
        return product

    @_storage_call
    def create_product(self, product: Product) -> Product:
        product.sku_key = normalize_sku(product.sku)
        self.db.add(product)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # The enclosing transaction() rolls the session back.
            raise DuplicateSku("SKU {} already exists".format(product.sku)) from exc
        return product

    @_storage_call
    def update_product(self, product: Product) -> Product:
        self.db.flush()
        return product

    @_storage_call
    def delete_product(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()

    # ==============================
    # Location ledger
    # ==============================
    @_storage_call
    def list_locations(self, query: Optional[str] = None, sku=None) -> list[ProductLocation]:
        stmt = select(ProductLocation).order_by(ProductLocation.location, ProductLocation.id)
        if sku is not None:
            stmt = stmt.where(func.lower(ProductLocation.sku) == normalize_sku(sku))
        if query:
            pattern = _like(query)
            stmt = stmt.where(
                or_(
                    ProductLocation.name.ilike(pattern),
                    ProductLocation.sku.ilike(pattern),
                    ProductLocation.location.ilike(pattern),
                )
            )
        return list(self.db.execute(stmt).scalars().all())

    @_storage_call
    def get_location_entry(self, entry_id) -> Optional[ProductLocation]:
        return self.db.get(ProductLocation, entry_id)

    def require_location_entry(self, entry_id) -> ProductLocation:
        entry = self.get_location_entry(entry_id)
        if entry is None:
            raise NotFound("Location entry {} not found".format(entry_id))
        return entry

    def find_location_entry(self, sku, location, units_per_box, *, exclude_id=None):
        location_key = normalize_location_name(location)
        for entry in self.list_locations(sku=sku):
            if entry.id == exclude_id:
                continue
            if normalize_location_name(entry.location) != location_key:
                continue
            if entry.units_per_box == units_per_box:
                return entry
        return None

    @_storage_call
    def create_location_entry(self, entry: ProductLocation) -> ProductLocation:
        self.db.add(entry)
        self.db.flush()
        return entry

    @_storage_call
    def update_location_entry(self, entry: ProductLocation) -> ProductLocation:
        self.db.flush()
        return entry

    @_storage_call
    def delete_location_entry(self, entry: ProductLocation) -> None:
        self.db.delete(entry)
        self.db.flush()

    @_storage_call
    def increment_volume(self, entry: ProductLocation, volume: int, entry_date) -> int:
        """Add ``volume`` boxes to ``entry`` in the database, not from the loaded copy."""
        self.db.execute(
            update(ProductLocation)
            .where(ProductLocation.id == entry.id)
            .values(volume=ProductLocation.volume + volume, date=entry_date)
            .execution_options(synchronize_session=False)
        )
        self.db.refresh(entry)
        return entry.volume

    @_storage_call
    def decrement_volume(self, entry: ProductLocation, volume: int) -> int:
        """Take ``volume`` boxes from ``entry`` and return what is left.

        The decrement is conditional on the volume still being available in
        the database, so two concurrent takes cannot both succeed against the
        same stale read. A drained entry is deleted in the same statement set.
        """
        entry_id = entry.id
        result = self.db.execute(
            update(ProductLocation)
            .where(ProductLocation.id == entry_id, ProductLocation.volume > volume)
            .values(volume=ProductLocation.volume - volume)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            self.db.refresh(entry)
            return entry.volume

        result = self.db.execute(
            delete(ProductLocation)
            .where(ProductLocation.id == entry_id, ProductLocation.volume == volume)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            if entry in self.db:
                self.db.expunge(entry)
            return 0

        raise InvalidVolume(
            "Entry {} no longer holds {} boxes".format(entry_id, volume)
        )

    # ==============================
    # Exits
    # ==============================
    @_storage_call
    def list_exits(self, query: Optional[str] = None, sku=None) -> list[ProductExit]:
        stmt = select(ProductExit).order_by(ProductExit.date.desc(), ProductExit.id.desc())
        if sku is not None:
            stmt = stmt.where(func.lower(ProductExit.sku) == normalize_sku(sku))
        if query:
            pattern = _like(query)
            stmt = stmt.where(
                or_(
                    ProductExit.name.ilike(pattern),
                    ProductExit.sku.ilike(pattern),
                    ProductExit.store.ilike(pattern),
                    ProductExit.observation.ilike(pattern),
                )
            )
        return list(self.db.execute(stmt).scalars().all())

    @_storage_call
    def get_exit(self, exit_id) -> Optional[ProductExit]:
        return self.db.get(ProductExit, exit_id)

    def require_exit(self, exit_id) -> ProductExit:
        record = self.get_exit(exit_id)
        if record is None:
            raise NotFound("Exit {} not found".format(exit_id))
        return record

    @_storage_call
    def create_exit(self, record: ProductExit) -> ProductExit:
        self.db.add(record)
        self.db.flush()
        return record

    @_storage_call
    def update_exit_observation(self, record: ProductExit, observation: str) -> ProductExit:
        record.observation = observation
        self.db.flush()
        return record

    @_storage_call
    def delete_exit(self, record: ProductExit) -> None:
        self.db.delete(record)
        self.db.flush()

    # ==============================
    # Master locations
    # ==============================
    @_storage_call
    def list_master_locations(self, query: Optional[str] = None) -> list[MasterLocation]:
        stmt = select(MasterLocation).order_by(MasterLocation.name)
        if query:
            stmt = stmt.where(MasterLocation.name.ilike(_like(query)))
        return list(self.db.execute(stmt).scalars().all())

    @_storage_call
    def get_master_location(self, name) -> Optional[MasterLocation]:
        return (
            self.db.execute(
                select(MasterLocation).where(
                    MasterLocation.name_key == normalize_location_name(name)
                )
            )
            .scalars()
            .first()
        )

    @_storage_call
    def add_master_location(self, name: str) -> MasterLocation:
        master = MasterLocation(name=name, name_key=normalize_location_name(name))
        self.db.add(master)
        self.db.flush()
        return master

    @_storage_call
    def remove_master_location(self, master: MasterLocation) -> None:
        self.db.delete(master)
        self.db.flush()

    # ==============================
    # Deletion requests
    # ==============================
    @_storage_call
    def list_deletion_requests(self, status: Optional[str] = None) -> list[DeletionRequest]:
        stmt = select(DeletionRequest).order_by(DeletionRequest.created_at, DeletionRequest.id)
        if status:
            stmt = stmt.where(DeletionRequest.status == status)
        return list(self.db.execute(stmt).scalars().all())

    @_storage_call
    def get_deletion_request(self, request_id) -> Optional[DeletionRequest]:
        return self.db.get(DeletionRequest, request_id)

    def require_deletion_request(self, request_id) -> DeletionRequest:
        request = self.get_deletion_request(request_id)
        if request is None:
            raise NotFound("Deletion request {} not found".format(request_id))
        return request

    @_storage_call
    def find_pending_request(self, target_type: str, target: str) -> Optional[DeletionRequest]:
        return (
            self.db.execute(
                select(DeletionRequest)
                .where(
                    DeletionRequest.target_type == target_type,
                    func.lower(DeletionRequest.target) == str(target).strip().lower(),
                    DeletionRequest.status == REQUEST_PENDING,
                )
                .limit(1)
            )
            .scalars()
            .first()
        )

    @_storage_call
    def create_deletion_request(self, request: DeletionRequest) -> DeletionRequest:
        self.db.add(request)
        self.db.flush()
        return request

    @_storage_call
    def update_deletion_request(self, request: DeletionRequest) -> DeletionRequest:
        self.db.flush()
        return request

    # ==============================
    # Audit log
    # ==============================
    @_storage_call
    def add_audit_log(self, entry: AuditLog) -> AuditLog:
        self.db.add(entry)
        self.db.flush()
        return entry

    @_storage_call
    def list_audit_logs(self, limit: int = 500) -> list[AuditLog]:
        stmt = select(AuditLog).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())


__all__ = ["InventoryRepository"]
