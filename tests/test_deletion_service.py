import unittest
from decimal import Decimal

from warehouse.core.constants import REQUEST_APPROVED, REQUEST_PENDING, REQUEST_REJECTED
from warehouse.core.errors import LocationOccupied, NotFound, ValidationError
from warehouse.core.security import Actor
from warehouse.services import deletion_service, location_service, product_service
from tests.support import RepositoryTestCase

ADMIN = Actor(name="ana", role="ADMIN")
CLERK = Actor(name="bruno", role="USUARIO")


class DeletionRequestTest(RepositoryTestCase):
    def setUp(self):
        super().setUp()
        product_service.create_product(
            self.repo,
            "D4",
            name="Broche",
            brand="Kualie",
            cost_price=Decimal("3.50"),
            units_per_box=2,
        )
        location_service.add_master_location(self.repo, "Rack-9")

    def test_request_and_approve_location(self):
        request = deletion_service.request_deletion(self.repo, "LOCATION", "rack-9", CLERK)
        self.assertEqual(request.status, REQUEST_PENDING)
        self.assertEqual(request.target, "Rack-9")
        self.assertEqual(request.requested_by, "bruno")
        self.assertEqual(deletion_service.pending_requests(self.repo), [request])

        approved = deletion_service.approve_request(self.repo, request.id, ADMIN)

        self.assertEqual(approved.status, REQUEST_APPROVED)
        self.assertEqual(approved.resolved_by, "ana")
        self.assertIsNotNone(approved.resolved_at)
        self.assertIsNone(self.repo.get_master_location("Rack-9"))
        self.assertEqual(deletion_service.pending_requests(self.repo), [])

    def test_request_and_approve_product(self):
        request = deletion_service.request_deletion(self.repo, "PRODUCT", "d4", CLERK)
        deletion_service.approve_request(self.repo, request.id, ADMIN)
        self.assertIsNone(self.repo.get_product("D4"))

    def test_reject_keeps_target(self):
        request = deletion_service.request_deletion(self.repo, "PRODUCT", "D4", CLERK)
        rejected = deletion_service.reject_request(self.repo, request.id, ADMIN)
        self.assertEqual(rejected.status, REQUEST_REJECTED)
        self.assertIsNotNone(self.repo.get_product("D4"))

    def test_only_one_pending_request_per_target(self):
        deletion_service.request_deletion(self.repo, "PRODUCT", "D4", CLERK)
        with self.assertRaises(ValidationError):
            deletion_service.request_deletion(self.repo, "PRODUCT", "d4", ADMIN)
        self.assertEqual(len(deletion_service.pending_requests(self.repo)), 1)

    def test_occupied_location_cannot_be_requested(self):
        location_service.add_location_entry(self.repo, "D4", "Rack-9", 1)
        with self.assertRaises(LocationOccupied):
            deletion_service.request_deletion(self.repo, "LOCATION", "Rack-9", CLERK)
        self.assertEqual(deletion_service.pending_requests(self.repo), [])

    def test_approval_rechecks_occupancy(self):
        request = deletion_service.request_deletion(self.repo, "LOCATION", "Rack-9", CLERK)
        location_service.add_location_entry(self.repo, "D4", "Rack-9", 1)

        with self.assertRaises(LocationOccupied):
            deletion_service.approve_request(self.repo, request.id, ADMIN)

        self.assertEqual(self.repo.get_deletion_request(request.id).status, REQUEST_PENDING)
        self.assertIsNotNone(self.repo.get_master_location("Rack-9"))

    def test_resolved_request_cannot_be_resolved_again(self):
        request = deletion_service.request_deletion(self.repo, "PRODUCT", "D4", CLERK)
        deletion_service.reject_request(self.repo, request.id, ADMIN)
        with self.assertRaises(ValidationError):
            deletion_service.approve_request(self.repo, request.id, ADMIN)

    def test_unknown_targets(self):
        with self.assertRaises(NotFound):
            deletion_service.request_deletion(self.repo, "PRODUCT", "nope", CLERK)
        with self.assertRaises(NotFound):
            deletion_service.request_deletion(self.repo, "LOCATION", "nowhere", CLERK)
        with self.assertRaises(ValidationError):
            deletion_service.request_deletion(self.repo, "SHELF", "Rack-9", CLERK)
        with self.assertRaises(NotFound):
            deletion_service.approve_request(self.repo, 999, ADMIN)

    def test_actions_are_audited(self):
        request = deletion_service.request_deletion(self.repo, "PRODUCT", "D4", CLERK)
        deletion_service.approve_request(self.repo, request.id, ADMIN)
        actions = [log.action_type for log in self.repo.list_audit_logs()]
        self.assertIn("SOLICITAR_EXCLUSAO", actions)
        self.assertIn("APROVAR_EXCLUSAO", actions)
        self.assertIn("EXCLUIR_PRODUTO", actions)


if __name__ == "__main__":
    unittest.main()
