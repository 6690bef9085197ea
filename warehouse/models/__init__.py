import importlib

from warehouse.models.audit_log import AuditLog
from warehouse.models.deletion_request import DeletionRequest
from warehouse.models.exit import ProductExit
from warehouse.models.location import ProductLocation
from warehouse.models.master_location import MasterLocation
from warehouse.models.product import Product


def import_all_models() -> None:
    for module_name in (
        "warehouse.models.audit_log",
        "warehouse.models.deletion_request",
        "warehouse.models.exit",
        "warehouse.models.location",
        "warehouse.models.master_location",
        "warehouse.models.product",
    ):
        importlib.import_module(module_name)


__all__ = [
    "AuditLog",
    "DeletionRequest",
    "MasterLocation",
    "Product",
    "ProductExit",
    "ProductLocation",
    "import_all_models",
]
