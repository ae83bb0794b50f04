# partsdesk/database.py

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from .models.storage import StorageSlot  # noqa: F401  (registers the table)


def make_engine(database_url: str) -> Engine:
    """Create engine with check_same_thread=False for sqlite (FastAPI threadpool)."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=False, connect_args=connect_args)


def create_db_and_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
