import argparse
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import delete, select

from warehouse.core.logging import setup_logging
from warehouse.database import Base, engine, session_scope
from warehouse.models import (
    AuditLog,
    DeletionRequest,
    MasterLocation,
    Product,
    ProductExit,
    ProductLocation,
    import_all_models,
)
from warehouse.services import location_service, product_service
from warehouse.services.repository import InventoryRepository


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample warehouse data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        if args.reset:
            for model in (
                AuditLog,
                DeletionRequest,
                ProductExit,
                ProductLocation,
                MasterLocation,
                Product,
            ):
                db.execute(delete(model))
            db.commit()

        has_product = db.execute(select(Product.id).limit(1)).first()
        if has_product:
            print("Seed skipped: products already exist.")
            return

        repo = InventoryRepository(db)
        product_service.create_product(
            repo,
            "BRC-001",
            name="Brinco Argola Dourada",
            brand="Kualie",
            color="Dourado",
            supplier="Bijux Atacado",
            cost_price=Decimal("4.90"),
            units_per_box=10,
            repurchase_threshold=20,
        )
        product_service.create_product(
            repo,
            "COL-014",
            name="Colar Ponto de Luz",
            brand="Kualie",
            color="Prata",
            supplier="Bijux Atacado",
            cost_price=Decimal("7.50"),
            units_per_box=12,
            repurchase_threshold=0,
        )

        location_service.add_location_entry(repo, "BRC-001", "A-01", 5)
        location_service.add_location_entry(
            repo,
            "COL-014",
            "B-03",
            4,
            entry_date=date.today() - timedelta(days=45),
        )
        for name in ("A-02", "C-01"):
            location_service.add_master_location(repo, name)
        print("Seed data created.")


if __name__ == "__main__":
    main()
