import unittest
from decimal import Decimal
from unittest import mock

from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from warehouse.core.errors import (
    CollaboratorUnavailable,
    InvalidVolume,
    MissingStore,
    NotFound,
    ValidationError,
)
from warehouse.core.ledger import quantity_of
from warehouse.models.location import ProductLocation
from warehouse.services import location_service, movement_service, product_service
from tests.support import RepositoryTestCase


class MovementServiceTest(RepositoryTestCase):
    def setUp(self):
        super().setUp()
        product_service.create_product(
            self.repo,
            "A1",
            name="Anel Solitário",
            brand="Kualie",
            cost_price=Decimal("3.20"),
            units_per_box=10,
        )
        self.shelf = location_service.add_location_entry(self.repo, "A1", "Shelf-1", 5)

    def _quantity(self):
        return quantity_of("A1", self.repo.list_locations())

    def test_move_splits_entry(self):
        result = movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", 3)

        self.assertEqual(result.source.volume, 2)
        self.assertEqual(result.destination.location, "Shelf-2")
        self.assertEqual(result.destination.volume, 3)
        self.assertEqual(result.destination.units_per_box, 10)
        self.assertEqual(self._quantity(), 50)

    def test_move_registers_destination(self):
        movement_service.move_volume(self.repo, self.shelf.id, "Shelf-9", 1)
        self.assertIsNotNone(self.repo.get_master_location("shelf-9"))

    def test_move_merges_into_existing_entry(self):
        movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", 2)
        movement_service.move_volume(self.repo, self.shelf.id, " shelf-2 ", 1)

        at_shelf_2 = [item for item in self.repo.list_locations() if item.location == "Shelf-2"]
        self.assertEqual(len(at_shelf_2), 1)
        self.assertEqual(at_shelf_2[0].volume, 3)
        self.assertEqual(self._quantity(), 50)

    def test_move_keeps_separate_entry_for_other_box_size(self):
        other = self.repo.create_location_entry(
            ProductLocation(sku="A1", name="Anel", location="Shelf-2", volume=1, units_per_box=6)
        )
        self.db.commit()

        movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", 2)

        volumes = sorted(
            (item.units_per_box, item.volume)
            for item in self.repo.list_locations()
            if item.location == "Shelf-2"
        )
        self.assertEqual(volumes, [(6, 1), (10, 2)])
        self.assertEqual(self.repo.get_location_entry(other.id).volume, 1)

    def test_moving_everything_deletes_source(self):
        result = movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", 5)

        self.assertIsNone(result.source)
        self.assertIsNone(self.repo.get_location_entry(self.shelf.id))
        self.assertTrue(all(item.volume > 0 for item in self.repo.list_locations()))
        self.assertEqual(self._quantity(), 50)

    def test_move_conserves_quantity_for_every_valid_volume(self):
        for volume in range(1, 6):
            with self.subTest(volume=volume):
                entry = location_service.add_location_entry(self.repo, "A1", "Dock-{}".format(volume), 5)
                before = self._quantity()
                movement_service.move_volume(self.repo, entry.id, "Bin-{}".format(volume), volume)
                self.assertEqual(self._quantity(), before)

    def test_move_rejects_out_of_bounds_volume(self):
        for volume in (0, -1, 6):
            with self.subTest(volume=volume):
                with self.assertRaises(InvalidVolume):
                    movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", volume)
        self.assertEqual(self.repo.get_location_entry(self.shelf.id).volume, 5)
        self.assertEqual(len(self.repo.list_locations()), 1)

    def test_move_unknown_source(self):
        with self.assertRaises(NotFound):
            movement_service.move_volume(self.repo, 999, "Shelf-2", 1)

    def test_move_requires_destination(self):
        with self.assertRaises(ValidationError):
            movement_service.move_volume(self.repo, self.shelf.id, "  ", 1)

    def test_exit_draining_entry_deletes_it(self):
        movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", 3)

        result = movement_service.create_exit(self.repo, self.shelf.id, "Expedição", 2)

        self.assertIsNone(result.source)
        self.assertIsNone(self.repo.get_location_entry(self.shelf.id))
        self.assertEqual(result.exit.quantity, 20)
        self.assertEqual(result.exit.exit_type, "Expedição")
        self.assertIsNone(result.exit.store)
        self.assertEqual(self._quantity(), 30)

    def test_partial_exit_decrements_source(self):
        result = movement_service.create_exit(
            self.repo,
            self.shelf.id,
            "Full",
            1,
            store="Shopee",
            observation="pedido 123",
        )
        self.assertEqual(result.source.volume, 4)
        self.assertEqual(result.exit.store, "Shopee")
        self.assertEqual(result.exit.observation, "pedido 123")
        self.assertEqual(len(self.repo.list_exits()), 1)

    def test_full_exit_requires_store(self):
        with self.assertRaises(MissingStore):
            movement_service.create_exit(self.repo, self.shelf.id, "Full", 1)
        self.assertEqual(self.repo.list_exits(), [])
        self.assertEqual(self.repo.get_location_entry(self.shelf.id).volume, 5)

    def test_exit_rejects_unknown_type_and_store(self):
        with self.assertRaises(ValidationError):
            movement_service.create_exit(self.repo, self.shelf.id, "Retirada", 1)
        with self.assertRaises(ValidationError):
            movement_service.create_exit(self.repo, self.shelf.id, "Full", 1, store="Loja X")

    def test_exit_rejects_out_of_bounds_volume(self):
        with self.assertRaises(InvalidVolume):
            movement_service.create_exit(self.repo, self.shelf.id, "Expedição", 6)
        self.assertEqual(self.repo.list_exits(), [])

    def test_exit_against_stale_volume_changes_nothing(self):
        # Another writer drains the entry to one box after it was loaded here.
        self.db.execute(
            update(ProductLocation)
            .where(ProductLocation.id == self.shelf.id)
            .values(volume=1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

        with self.assertRaises(InvalidVolume):
            movement_service.create_exit(self.repo, self.shelf.id, "Expedição", 3)

        self.assertEqual(self.repo.list_exits(), [])
        self.assertEqual(self.repo.get_location_entry(self.shelf.id).volume, 1)

    def test_merge_adds_to_the_stored_destination_volume(self):
        other = location_service.add_location_entry(self.repo, "A1", "Shelf-2", 3)
        # Another writer adds four boxes to Shelf-2 after it was loaded here.
        self.db.execute(
            update(ProductLocation)
            .where(ProductLocation.id == other.id)
            .values(volume=ProductLocation.volume + 4)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

        result = movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", 2)

        self.assertEqual(result.destination.id, other.id)
        self.assertEqual(result.destination.volume, 9)
        self.assertEqual(self._quantity(), 120)

    def test_storage_failure_leaves_ledger_untouched(self):
        failure = OperationalError("INSERT", {}, Exception("disk I/O error"))
        with mock.patch.object(self.db, "flush", side_effect=failure):
            with self.assertRaises(CollaboratorUnavailable):
                movement_service.create_exit(self.repo, self.shelf.id, "Expedição", 2)

        self.assertEqual(self.repo.list_exits(), [])
        self.assertEqual(self.repo.get_location_entry(self.shelf.id).volume, 5)

    def test_volume_given_as_text(self):
        result = movement_service.move_volume(self.repo, self.shelf.id, "Shelf-2", "2")
        self.assertEqual(result.volume, 2)
        for volume in ("2.5", "two", 2.5, True):
            with self.subTest(volume=volume):
                with self.assertRaises(InvalidVolume):
                    movement_service.create_exit(self.repo, self.shelf.id, "Expedição", volume)

    def test_observation_is_the_only_mutable_field(self):
        record = movement_service.create_exit(self.repo, self.shelf.id, "Expedição", 1).exit
        original = (record.quantity, record.date, record.exit_type, record.store)

        updated = movement_service.update_exit_observation(self.repo, record.id, "conferido")
        updated = movement_service.update_exit_observation(self.repo, record.id, "reconferido")

        self.assertEqual(updated.observation, "reconferido")
        self.assertEqual((updated.quantity, updated.date, updated.exit_type, updated.store), original)

    def test_deleting_exit_does_not_restore_stock(self):
        record = movement_service.create_exit(self.repo, self.shelf.id, "Expedição", 2).exit

        movement_service.delete_exit(self.repo, record.id)

        self.assertIsNone(self.repo.get_exit(record.id))
        self.assertEqual(self._quantity(), 30)

    def test_delete_unknown_exit(self):
        with self.assertRaises(NotFound):
            movement_service.delete_exit(self.repo, 404)


if __name__ == "__main__":
    unittest.main()
