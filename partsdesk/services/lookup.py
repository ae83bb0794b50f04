# partsdesk/services/lookup.py
"""
Lookup session: the match-then-confirm workflow behind order entry and
stock audit.

    IDLE       input shorter than the minimum length (or empty)
    MATCHED    normalized input equals some Part's part_no
    NOT_FOUND  input long enough, no exact match

The catalog is re-queried on every input change. Confirm is inert (returns
None) unless the session is MATCHED and the quantity is a positive integer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Union

from ..models.catalog import Part
from ..models.orders import Order, OrderStatus, OrderType
from ..utils.logger import get_logger
from .catalog import CatalogStore, normalize_key
from .ledger import OrderLedger

log = get_logger(__name__)

DEFAULT_MIN_CHARS = 3
AUDIT_VEHICLE = "INVENTORY_AUDIT"
NO_VEHICLE = "N/A"

_POSITIVE_INT = re.compile(r"\+?[0-9]+")


class LookupState(str, Enum):
    IDLE = "idle"
    MATCHED = "matched"
    NOT_FOUND = "not_found"


class SessionMode(str, Enum):
    STOCK_AUDIT = "stock_audit"
    ORDER_ENTRY = "order_entry"


@dataclass(frozen=True)
class ModeDefaults:
    order_type: OrderType
    status: OrderStatus
    vehicle_number: str


MODE_DEFAULTS: Dict[SessionMode, ModeDefaults] = {
    SessionMode.STOCK_AUDIT: ModeDefaults(OrderType.STOCK, OrderStatus.COMPLETED, AUDIT_VEHICLE),
    SessionMode.ORDER_ENTRY: ModeDefaults(OrderType.STOCK, OrderStatus.PENDING, NO_VEHICLE),
}


def parse_quantity(raw: Union[str, int, None]) -> Optional[int]:
    """Return a positive int, or None for anything else (blank, text, 0, negatives, decimals)."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    text = (raw or "").strip()
    if not _POSITIVE_INT.fullmatch(text):
        return None
    value = int(text)
    return value if value > 0 else None


class LookupSession:
    def __init__(
        self,
        catalog: CatalogStore,
        ledger: OrderLedger,
        mode: SessionMode = SessionMode.STOCK_AUDIT,
        min_chars: int = DEFAULT_MIN_CHARS,
    ) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.mode = SessionMode(mode)
        self.min_chars = min_chars
        self.reset()

    def reset(self) -> None:
        """Back to IDLE with every input cleared."""
        defaults = MODE_DEFAULTS[self.mode]
        self.query = ""
        self.state = LookupState.IDLE
        self.matched: Optional[Part] = None
        self.quantity: Union[str, int] = ""
        self.order_type = defaults.order_type
        self.vehicle_number = ""
        self.override_location = False
        self.new_location = ""

    # -------- input --------

    def set_query(self, text: str) -> LookupState:
        self.query = text or ""
        key = normalize_key(self.query)
        if len(key) < self.min_chars:
            self.matched = None
            self.state = LookupState.IDLE
        else:
            self.matched = self.catalog.find_by_part_no(key)
            self.state = LookupState.MATCHED if self.matched else LookupState.NOT_FOUND
        return self.state

    def set_order_type(self, value: Union[str, OrderType]) -> None:
        """Raises ValueError for anything outside the OrderType enumeration."""
        self.order_type = OrderType(value)

    def set_location_override(self, new_location: str) -> None:
        self.override_location = True
        self.new_location = new_location or ""

    # -------- derived values --------

    @property
    def has_input(self) -> bool:
        return bool(self.query.strip())

    @property
    def upcoming_stock(self) -> Optional[float]:
        return self.matched.upcoming_stock if self.matched else None

    @property
    def total_available(self) -> Optional[float]:
        return self.matched.total_available if self.matched else None

    @property
    def can_confirm(self) -> bool:
        return self.state == LookupState.MATCHED and parse_quantity(self.quantity) is not None

    # -------- confirm --------

    def confirm(self, user_name: str, now: Optional[datetime] = None) -> Optional[Order]:
        """
        Record the order for the matched part.

        The order is appended first; the optional location patch follows.
        If the patch cannot be persisted the order still stands.
        """
        # catalog may have been replaced since the last keystroke
        self.set_query(self.query)
        if not self.can_confirm:
            return None

        part = self.matched
        defaults = MODE_DEFAULTS[self.mode]
        new_location = normalize_key(self.new_location) if self.override_location else ""

        order = Order(
            id=self.ledger.next_order_id(),
            timestamp=now or datetime.now(timezone.utc),
            user_name=user_name,
            vehicle_number=self.vehicle_number.strip().upper() or defaults.vehicle_number,
            order_type=self.order_type,
            part_no=part.part_no,
            part_name=part.part_name,
            location=new_location or part.location,
            quantity=parse_quantity(self.quantity),
            status=defaults.status,
        )
        self.ledger.append(order)

        if new_location:
            self.catalog.update_location(part.part_no, new_location)

        log.info(
            "order_confirmed",
            order_id=order.id,
            part_no=order.part_no,
            quantity=order.quantity,
            order_type=order.order_type.value,
            mode=self.mode.value,
            location_changed=bool(new_location),
        )
        self.reset()
        return order
