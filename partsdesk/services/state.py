# partsdesk/services/state.py
"""
Everything the desk holds between requests, owned by the app
(`app.state.desk`) rather than living in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..config import Settings
from ..models.users import User
from ..seed_data import AUTH_USERS, SAMPLE_CATALOG_CSV
from .auth import authenticate
from .catalog import CatalogStore
from .ledger import OrderLedger
from .lookup import LookupSession, SessionMode
from .storage import JsonFileSlotStore, MemorySlotStore, SlotStore, SqlSlotStore


@dataclass
class DeskState:
    settings: Settings
    catalog: CatalogStore
    ledger: OrderLedger
    users: List[User] = field(default_factory=lambda: list(AUTH_USERS))
    current_user: Optional[User] = None

    def login(self, user_id: str, password: str) -> Optional[User]:
        """Sets current_user on success; a failed attempt leaves the state untouched."""
        user = authenticate(self.users, self.settings.shared_password, user_id, password)
        if user is not None:
            self.current_user = user
        return user

    def logout(self) -> None:
        self.current_user = None

    def new_session(self, mode: SessionMode = SessionMode.STOCK_AUDIT) -> LookupSession:
        return LookupSession(self.catalog, self.ledger, mode=mode, min_chars=self.settings.lookup_min_chars)


def build_slot_store(settings: Settings) -> SlotStore:
    if settings.storage_backend == "memory":
        return MemorySlotStore()
    if settings.storage_backend == "file":
        return JsonFileSlotStore(settings.data_dir)

    from ..database import create_db_and_tables, make_engine

    engine = make_engine(settings.database_url)
    create_db_and_tables(engine)
    return SqlSlotStore(engine)


def load_desk_state(slots: SlotStore, settings: Settings, fallback_csv: str = SAMPLE_CATALOG_CSV) -> DeskState:
    """Load catalog and ledger from their slots (falling back to the sample / empty)."""
    return DeskState(
        settings=settings,
        catalog=CatalogStore.load(slots, settings.catalog_key, fallback_csv),
        ledger=OrderLedger.load(slots, settings.ledger_key),
    )
