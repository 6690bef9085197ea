from warehouse.services.dashboard_service import exit_summary, inventory_status
from warehouse.services.movement_service import create_exit, move_volume
from warehouse.services.repository import InventoryRepository

__all__ = [
    "InventoryRepository",
    "create_exit",
    "exit_summary",
    "inventory_status",
    "move_volume",
]
