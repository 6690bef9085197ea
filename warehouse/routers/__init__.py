from warehouse.routers.admin import router as admin_router
from warehouse.routers.dashboard import router as dashboard_router
from warehouse.routers.exits import router as exits_router
from warehouse.routers.health import router as health_router
from warehouse.routers.locations import router as locations_router
from warehouse.routers.master_locations import router as master_locations_router
from warehouse.routers.products import router as products_router

__all__ = [
    "admin_router",
    "dashboard_router",
    "exits_router",
    "health_router",
    "locations_router",
    "master_locations_router",
    "products_router",
]
