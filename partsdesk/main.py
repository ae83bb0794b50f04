# partsdesk/main.py
#
# Run with:  uvicorn partsdesk.main:create_app --factory

from typing import Optional

from fastapi import FastAPI

from .config import Settings, get_settings
from .services.state import build_slot_store, load_desk_state
from .services.storage import SlotStore
from .utils.logger import configure_logging, get_logger

from .api import auth as auth_api
from .api import catalog as catalog_api
from .api import orders as orders_api
from .api import reports as reports_api


def create_app(settings: Optional[Settings] = None, slots: Optional[SlotStore] = None) -> FastAPI:
    """
    Build the app and load catalog + ledger into app.state.desk.

    `slots` overrides the storage backend chosen by settings (tests pass a
    MemorySlotStore).
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if slots is None:
        slots = build_slot_store(settings)

    app = FastAPI(title="Parts Desk")
    app.state.desk = load_desk_state(slots, settings)

    # Include API routers
    app.include_router(auth_api.router)
    app.include_router(catalog_api.router)
    app.include_router(orders_api.router)
    app.include_router(reports_api.router)

    get_logger(__name__).info(
        "desk_started",
        storage=type(slots).__name__,
        parts=len(app.state.desk.catalog),
        orders=len(app.state.desk.ledger),
    )
    return app
