"""Tests for CatalogStore: lookup, replace, location patch, persistence."""

import unittest

from partsdesk.models.catalog import Part
from partsdesk.services.catalog import CatalogStore, deserialize_parts, serialize_parts
from partsdesk.services.csv_parser import parse_catalog_csv
from partsdesk.services.storage import MemorySlotStore, StorageError

KEY = "catalog"
SAMPLE = "h\nS1,Sample,X1,1,0,0,0,0,0,0\nS2,Other,X2,2,0,0,0,0,0,0\n"


def two_parts():
    return parse_catalog_csv("h\nA1,Bolt,L1,10,0,0,1,5,90,8\nA2,Nut,,1,0,0,0,2,50,3")


class BrokenSlotStore(MemorySlotStore):
    """Reads fine, every write fails."""

    def save(self, key, data):
        raise StorageError("quota exceeded")


class TestCatalogLookup(unittest.TestCase):
    def setUp(self):
        self.slots = MemorySlotStore()
        self.store = CatalogStore(self.slots, KEY)
        self.store.replace_all(two_parts())

    def test_exact_match_case_insensitive(self):
        self.assertEqual(self.store.find_by_part_no("a1").part_name, "Bolt")
        self.assertEqual(self.store.find_by_part_no("  A2 ").part_name, "Nut")

    def test_miss(self):
        self.assertIsNone(self.store.find_by_part_no("zz"))
        self.assertIsNone(self.store.find_by_part_no(""))

    def test_no_prefix_matching(self):
        self.assertIsNone(self.store.find_by_part_no("A"))
        self.assertIsNone(self.store.find_by_part_no("A12"))

    def test_first_duplicate_wins(self):
        parts = parse_catalog_csv("h\nD1,First,L1,1,0,0,0,0,0,0\nd1,Second,L2,2,0,0,0,0,0,0")
        duplicates = self.store.replace_all(parts)
        self.assertEqual(duplicates, ["D1"])
        self.assertEqual(self.store.find_by_part_no("D1").part_name, "First")
        self.assertEqual(len(self.store), 2)


class TestCatalogMutations(unittest.TestCase):
    def setUp(self):
        self.slots = MemorySlotStore()
        self.store = CatalogStore(self.slots, KEY)

    def test_replace_all_persists(self):
        self.store.replace_all(two_parts())
        self.assertEqual(self.slots.writes, 1)
        saved = deserialize_parts(self.slots.load(KEY))
        self.assertEqual([p.part_no for p in saved], ["A1", "A2"])

    def test_replace_all_swaps_index(self):
        self.store.replace_all(two_parts())
        self.store.replace_all(parse_catalog_csv("h\nB9,Washer,W1,3,0,0,0,0,0,0"))
        self.assertIsNone(self.store.find_by_part_no("A1"))
        self.assertEqual(self.store.find_by_part_no("b9").part_name, "Washer")

    def test_update_location_in_place(self):
        self.store.replace_all(two_parts())
        before = self.store.all()
        updated = self.store.update_location("A2", "L2")
        self.assertEqual(updated.location, "L2")
        after = self.store.all()
        self.assertEqual([p.part_no for p in after], ["A1", "A2"])
        self.assertEqual(after[1].model_dump(exclude={"location"}), before[1].model_dump(exclude={"location"}))
        self.assertEqual(after[0], before[0])
        self.assertEqual(self.slots.writes, 2)
        self.assertEqual(deserialize_parts(self.slots.load(KEY))[1].location, "L2")

    def test_update_location_uses_record_key(self):
        self.store.replace_all(two_parts())
        # exact part_no of the record, not the normalized search key
        self.assertIsNone(self.store.update_location("a2", "L2"))
        self.assertEqual(self.slots.writes, 1)

    def test_preview(self):
        self.store.replace_all(two_parts())
        self.assertEqual([p.part_no for p in self.store.preview(1)], ["A1"])

    def test_persist_failure_keeps_memory(self):
        store = CatalogStore(BrokenSlotStore(), KEY)
        store.replace_all(two_parts())
        self.assertEqual(len(store), 2)
        self.assertEqual(store.update_location("A1", "Z9").location, "Z9")


class TestCatalogLoad(unittest.TestCase):
    def test_absent_slot_seeds_sample_and_persists(self):
        slots = MemorySlotStore()
        store = CatalogStore.load(slots, KEY, SAMPLE)
        self.assertEqual([p.part_no for p in store.all()], ["S1", "S2"])
        self.assertIsNotNone(slots.load(KEY))

    def test_malformed_slot_falls_back(self):
        slots = MemorySlotStore({KEY: b"{not json"})
        store = CatalogStore.load(slots, KEY, SAMPLE)
        self.assertEqual(len(store), 2)
        self.assertEqual(len(deserialize_parts(slots.load(KEY))), 2)

    def test_wrong_shape_slot_falls_back(self):
        slots = MemorySlotStore({KEY: b'{"part_no": "X"}'})
        store = CatalogStore.load(slots, KEY, SAMPLE)
        self.assertEqual(store.find_by_part_no("S1").part_name, "Sample")

    def test_non_finite_numbers_fall_back(self):
        for payload in (b'[{"part_no":"A1","on_hand":NaN,"sys_gen_stock":5}]',
                        b'[{"part_no":"A1","due_in":Infinity}]'):
            slots = MemorySlotStore({KEY: payload})
            store = CatalogStore.load(slots, KEY, SAMPLE)
            self.assertEqual([p.part_no for p in store.all()], ["S1", "S2"])
            self.assertIsNone(store.find_by_part_no("A1"))

    def test_saved_slot_wins_over_sample(self):
        slots = MemorySlotStore({KEY: serialize_parts(two_parts())})
        store = CatalogStore.load(slots, KEY, SAMPLE)
        self.assertEqual([p.part_no for p in store.all()], ["A1", "A2"])
        self.assertEqual(slots.writes, 0)


class TestPartRoundTrip(unittest.TestCase):
    def test_round_trip_keeps_types(self):
        parts = two_parts() + [Part(part_no="X1", part_name="Odd", on_hand=2.5, mav=1e6)]
        data = serialize_parts(parts)
        restored = deserialize_parts(data)
        self.assertEqual(restored, parts)
        self.assertIsInstance(restored[0].on_hand, float)
        self.assertEqual(serialize_parts(restored), data)

    def test_derived_values_not_persisted(self):
        data = serialize_parts(two_parts()).decode()
        self.assertNotIn("upcoming_stock", data)
        self.assertNotIn("total_available", data)


if __name__ == "__main__":
    unittest.main()
