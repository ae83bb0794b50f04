"""Tests for the append-only order ledger."""

import unittest
from datetime import datetime, timezone

from pydantic import ValidationError

from partsdesk.models.orders import Order, OrderStatus, OrderType
from partsdesk.services.ledger import OrderIdFactory, OrderLedger, deserialize_orders, serialize_orders
from partsdesk.services.storage import MemorySlotStore, StorageError

KEY = "orders"


def make_order(n: int, **overrides) -> Order:
    fields = dict(
        id=f"ORD-{n}",
        timestamp=datetime(2026, 10, 19, 9, 30, n, tzinfo=timezone.utc),
        user_name="Counter Staff 1",
        vehicle_number="KA01AB1234",
        order_type=OrderType.URGENT,
        part_no=f"P{n}",
        part_name="Bolt",
        location="L1",
        quantity=n + 1,
        status=OrderStatus.PENDING,
    )
    fields.update(overrides)
    return Order(**fields)


class TestOrderLedger(unittest.TestCase):
    def setUp(self):
        self.slots = MemorySlotStore()
        self.ledger = OrderLedger(self.slots, KEY)

    def test_append_keeps_call_order(self):
        for n in range(5):
            self.ledger.append(make_order(n))
        self.assertEqual(len(self.ledger.all()), 5)
        self.assertEqual([o.id for o in self.ledger.all()], [f"ORD-{n}" for n in range(5)])
        self.assertEqual(self.ledger.newest_first()[0].id, "ORD-4")

    def test_every_append_persists_full_sequence(self):
        self.ledger.append(make_order(1))
        self.ledger.append(make_order(2))
        self.assertEqual(self.slots.writes, 2)
        saved = deserialize_orders(self.slots.load(KEY))
        self.assertEqual([o.id for o in saved], ["ORD-1", "ORD-2"])

    def test_all_is_read_only_snapshot(self):
        self.ledger.append(make_order(1))
        snapshot = self.ledger.all()
        self.ledger.append(make_order(2))
        self.assertEqual(len(snapshot), 1)
        self.assertIsInstance(snapshot, tuple)

    def test_orders_are_immutable(self):
        order = self.ledger.append(make_order(1))
        with self.assertRaises(ValidationError):
            order.quantity = 99

    def test_persist_failure_still_appends(self):
        class Broken(MemorySlotStore):
            def save(self, key, data):
                raise StorageError("disk full")

        ledger = OrderLedger(Broken(), KEY)
        ledger.append(make_order(1))
        self.assertEqual(len(ledger), 1)


class TestOrderLedgerLoad(unittest.TestCase):
    def test_absent_slot_is_empty(self):
        self.assertEqual(len(OrderLedger.load(MemorySlotStore(), KEY)), 0)

    def test_malformed_slot_is_empty(self):
        slots = MemorySlotStore({KEY: b"[{]"})
        self.assertEqual(len(OrderLedger.load(slots, KEY)), 0)

    def test_restores_saved_orders(self):
        orders = [make_order(1), make_order(2, order_type=OrderType.VOR, status=OrderStatus.COMPLETED)]
        slots = MemorySlotStore({KEY: serialize_orders(orders)})
        ledger = OrderLedger.load(slots, KEY)
        self.assertEqual(list(ledger.all()), orders)


class TestOrderSerialization(unittest.TestCase):
    def test_round_trip(self):
        orders = [make_order(1), make_order(2, order_type=OrderType.ACCESSORIES, status=OrderStatus.CANCELLED)]
        data = serialize_orders(orders)
        restored = deserialize_orders(data)
        self.assertEqual(restored, orders)
        self.assertIsInstance(restored[0].quantity, int)
        self.assertIs(restored[1].order_type, OrderType.ACCESSORIES)
        self.assertEqual(serialize_orders(restored), data)

    def test_enums_stored_as_labels(self):
        data = serialize_orders([make_order(1)]).decode()
        self.assertIn('"order_type":"Urgent"', data)
        self.assertIn('"status":"Pending"', data)

    def test_unknown_order_type_rejected(self):
        with self.assertRaises(ValidationError):
            make_order(1, order_type="Express")

    def test_quantity_must_be_positive(self):
        with self.assertRaises(ValidationError):
            make_order(1, quantity=0)


class TestOrderIdFactory(unittest.TestCase):
    def test_ids_unique_and_increasing(self):
        next_id = OrderIdFactory()
        ids = [next_id() for _ in range(1000)]
        self.assertEqual(len(set(ids)), 1000)
        numbers = [int(i.removeprefix("ORD-")) for i in ids]
        self.assertEqual(numbers, sorted(numbers))
        self.assertTrue(all(i.startswith("ORD-") for i in ids))


if __name__ == "__main__":
    unittest.main()
