# partsdesk/services/ledger.py
"""
Order ledger: append-only, insertion order is the canonical order
(in memory and in the persisted slot). Presentation that wants newest
first asks for newest_first().
"""

from __future__ import annotations

import threading
import time
from typing import List, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from ..models.orders import Order
from ..utils.logger import get_logger
from .storage import SlotStore, StorageError

log = get_logger(__name__)

ORDER_ID_PREFIX = "ORD-"

_orders_adapter = TypeAdapter(List[Order])


def serialize_orders(orders: Sequence[Order]) -> bytes:
    return _orders_adapter.dump_json(list(orders))


def deserialize_orders(data: bytes) -> List[Order]:
    return _orders_adapter.validate_json(data)


class OrderIdFactory:
    """
    ORD-<nanoseconds> ids. The counter never repeats or goes backwards,
    even when the clock is coarser than the creation rate.
    """

    def __init__(self, prefix: str = ORDER_ID_PREFIX) -> None:
        self.prefix = prefix
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            self._last = max(time.time_ns(), self._last + 1)
            return f"{self.prefix}{self._last}"


class OrderLedger:
    def __init__(self, slots: SlotStore, key: str, orders: Sequence[Order] = ()) -> None:
        self.slots = slots
        self.key = key
        self._lock = threading.Lock()
        self._orders: List[Order] = list(orders)
        self.next_order_id = OrderIdFactory()

    @classmethod
    def load(cls, slots: SlotStore, key: str) -> "OrderLedger":
        """Restore the ledger; an absent or malformed slot gives an empty ledger."""
        try:
            raw = slots.load(key)
        except StorageError as e:
            log.warning("ledger_load_failed", key=key, error=str(e))
            raw = None

        if raw is None:
            return cls(slots, key)
        try:
            orders = deserialize_orders(raw)
        except ValidationError as e:
            log.warning("ledger_slot_malformed", key=key, errors=e.error_count())
            return cls(slots, key)

        log.info("ledger_loaded", key=key, orders=len(orders))
        return cls(slots, key, orders)

    def append(self, order: Order) -> Order:
        with self._lock:
            self._orders.append(order)
            try:
                self.slots.save(self.key, serialize_orders(self._orders))
            except StorageError as e:
                log.error("ledger_persist_failed", key=self.key, order_id=order.id, error=str(e))
        return order

    def all(self) -> Tuple[Order, ...]:
        return tuple(self._orders)

    def newest_first(self) -> Tuple[Order, ...]:
        return tuple(reversed(self._orders))

    def __len__(self) -> int:
        return len(self._orders)
