import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from warehouse.config import Settings, get_settings
from warehouse.core.errors import InventoryError
from warehouse.core.logging import setup_logging
from warehouse.database import Base, engine
from warehouse.models import import_all_models
from warehouse.routers import (
    admin_router,
    dashboard_router,
    exits_router,
    health_router,
    locations_router,
    master_locations_router,
    products_router,
)

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)


app = FastAPI(title=settings.APP_NAME)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "kind": exc.kind},
    )


app.include_router(health_router)
app.include_router(products_router)
app.include_router(locations_router)
app.include_router(exits_router)
app.include_router(master_locations_router)
app.include_router(dashboard_router)
app.include_router(admin_router)


__all__ = ["app"]
