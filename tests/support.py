import unittest
from datetime import date
from types import SimpleNamespace

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from warehouse.database.base import Base
from warehouse.models import import_all_models
from warehouse.services.repository import InventoryRepository


def make_engine():
    import_all_models()
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


def make_sessionmaker(engine):
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def entry(sku, location, volume, units_per_box=1, entry_date=None):
    return SimpleNamespace(
        sku=sku,
        location=location,
        volume=volume,
        units_per_box=units_per_box,
        date=entry_date or date.today(),
    )


def exit_record(sku, quantity, exit_date=None):
    return SimpleNamespace(sku=sku, quantity=quantity, date=exit_date or date.today())


class RepositoryTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine()
        self.db = make_sessionmaker(self.engine)()
        self.repo = InventoryRepository(self.db)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()
