import unittest
from datetime import date, timedelta
from decimal import Decimal

from warehouse.services import dashboard_service, location_service, movement_service, product_service
from tests.support import RepositoryTestCase


class DashboardServiceTest(RepositoryTestCase):
    def setUp(self):
        super().setUp()
        self.today = date.today()
        for sku, units_per_box, threshold in (
            ("P1", 10, 20),
            ("P2", 1, 0),
            ("P3", 1, 0),
            ("P4", 1, 0),
        ):
            product_service.create_product(
                self.repo,
                sku,
                name="Produto {}".format(sku),
                brand="Kualie",
                cost_price=Decimal("5.00"),
                units_per_box=units_per_box,
                repurchase_threshold=threshold,
            )

        low = location_service.add_location_entry(self.repo, "P1", "A-01", 3)
        movement_service.create_exit(self.repo, low.id, "Expedição", 2)

        location_service.add_location_entry(
            self.repo, "P2", "A-02", 4, entry_date=self.today - timedelta(days=45)
        )

        fresh = location_service.add_location_entry(self.repo, "P3", "A-03", 2)
        movement_service.create_exit(self.repo, fresh.id, "Full", 1, store="Shopee")

    def test_inventory_status(self):
        status = dashboard_service.inventory_status(self.repo, today=self.today)

        self.assertEqual(status["product_count"], 4)
        self.assertEqual(
            status["status_counts"],
            {"OK": 2, "REPURCHASE": 1, "STAGNANT": 1},
        )

        [repurchase] = status["repurchase"]
        self.assertEqual(repurchase["sku"], "P1")
        self.assertEqual(repurchase["current_quantity"], 10)
        self.assertEqual(repurchase["suggestion"], 30)

        [stagnant] = status["stagnant"]
        self.assertEqual(stagnant["sku"], "P2")
        self.assertEqual(stagnant["current_quantity"], 4)
        self.assertEqual(stagnant["days_since_last_movement"], 45)

    def test_exit_summary(self):
        summary = dashboard_service.exit_summary(self.repo, "shopee, Amazon,unknown")
        self.assertEqual(summary["count"], 2)
        self.assertEqual(
            summary["results"],
            [
                {"name": "Expedição", "quantity": 20},
                {"name": "Full (Total)", "quantity": 1},
                {"name": "Shopee", "quantity": 1},
                {"name": "Amazon", "quantity": 0},
            ],
        )

    def test_exit_summary_without_filters(self):
        summary = dashboard_service.exit_summary(self.repo)
        self.assertEqual([item["name"] for item in summary["results"]], ["Expedição", "Full (Total)"])


if __name__ == "__main__":
    unittest.main()
