import unittest
from datetime import date
from decimal import Decimal

from warehouse.core.errors import DuplicateSku, LocationOccupied, NotFound, ValidationError
from warehouse.services import location_service, product_service
from tests.support import RepositoryTestCase


class ProductServiceTest(RepositoryTestCase):
    def _create(self, sku="A1", **overrides):
        fields = dict(
            name="Anel",
            brand="Kualie",
            supplier="Bijux",
            cost_price=Decimal("10.00"),
            units_per_box=10,
            repurchase_threshold=20,
        )
        fields.update(overrides)
        return product_service.create_product(self.repo, sku, **fields)

    def test_create_starts_price_history(self):
        product = self._create()
        self.assertEqual(product.previous_price, Decimal("10.00"))
        self.assertEqual(product.best_price, Decimal("10.00"))
        self.assertEqual(product.last_edit_date, date.today())

    def test_duplicate_sku_is_case_insensitive(self):
        self._create("A1")
        with self.assertRaises(DuplicateSku):
            self._create("a1")
        self.assertEqual(len(self.repo.list_products()), 1)

    def test_required_fields(self):
        cases = [
            {"name": "  "},
            {"brand": ""},
            {"cost_price": 0},
            {"cost_price": Decimal("-1")},
            {"units_per_box": 0},
            {"repurchase_threshold": -1},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValidationError):
                    self._create("X1", **overrides)
        with self.assertRaises(ValidationError):
            self._create(" ")
        self.assertEqual(self.repo.list_products(), [])

    def test_edit_tracks_previous_and_best_price(self):
        self._create()
        product = product_service.edit_product(
            self.repo, "A1", cost_price=Decimal("8.00"), edited_on=date(2024, 3, 1)
        )
        self.assertEqual(product.previous_price, Decimal("10.00"))
        self.assertEqual(product.best_price, Decimal("8.00"))
        self.assertEqual(product.last_edit_date, date(2024, 3, 1))

        product = product_service.edit_product(self.repo, "a1", cost_price=Decimal("11.00"))
        self.assertEqual(product.cost_price, Decimal("11.00"))
        self.assertEqual(product.previous_price, Decimal("8.00"))
        self.assertEqual(product.best_price, Decimal("8.00"))

    def test_edit_without_price_keeps_history(self):
        self._create()
        product = product_service.edit_product(self.repo, "A1", name="Anel Dourado")
        self.assertEqual(product.name, "Anel Dourado")
        self.assertEqual(product.best_price, Decimal("10.00"))

    def test_edit_unknown_product(self):
        with self.assertRaises(NotFound):
            product_service.edit_product(self.repo, "nope", name="x")

    def test_clone_copies_fields_with_fresh_history(self):
        self._create()
        product_service.edit_product(self.repo, "A1", cost_price=Decimal("6.00"))
        product_service.edit_product(self.repo, "A1", cost_price=Decimal("9.00"))

        clone = product_service.clone_product(self.repo, "A1", "A2", color="Prata")

        self.assertEqual(clone.sku, "A2")
        self.assertEqual(clone.name, "Anel")
        self.assertEqual(clone.color, "Prata")
        self.assertEqual(clone.units_per_box, 10)
        self.assertEqual(clone.cost_price, Decimal("9.00"))
        self.assertEqual(clone.best_price, Decimal("9.00"))
        self.assertEqual(clone.previous_price, Decimal("9.00"))

    def test_clone_to_existing_sku(self):
        self._create("A1")
        self._create("A2")
        with self.assertRaises(DuplicateSku):
            product_service.clone_product(self.repo, "A1", "a2")

    def test_delete_blocked_while_stock_exists(self):
        self._create()
        location_service.add_location_entry(self.repo, "A1", "Rack-1", 1)
        with self.assertRaises(LocationOccupied):
            product_service.delete_product(self.repo, "A1")
        self.assertIsNotNone(self.repo.get_product("A1"))

    def test_delete(self):
        self._create()
        product_service.delete_product(self.repo, "a1")
        self.assertIsNone(self.repo.get_product("A1"))

    def test_products_with_quantity(self):
        self._create("A1")
        self._create("B1", name="Brinco")
        location_service.add_location_entry(self.repo, "A1", "Rack-1", 5)
        rows = {product.sku: quantity for product, quantity in product_service.products_with_quantity(self.repo)}
        self.assertEqual(rows, {"A1": 50, "B1": 0})


if __name__ == "__main__":
    unittest.main()
