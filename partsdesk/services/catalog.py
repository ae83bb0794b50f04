# partsdesk/services/catalog.py
"""
Catalog store: the current ordered list of Part records.

Lookups go through a case-normalized index that keeps the FIRST record seen
for each key, so duplicate part numbers resolve to the earliest imported row.
Every mutation writes the full list back to its persistence slot.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from ..models.catalog import Part
from ..utils.logger import get_logger
from .csv_parser import find_duplicate_part_numbers, parse_catalog_csv
from .storage import SlotStore, StorageError

log = get_logger(__name__)

_parts_adapter = TypeAdapter(List[Part])


def serialize_parts(parts: Sequence[Part]) -> bytes:
    return _parts_adapter.dump_json(list(parts))


def deserialize_parts(data: bytes) -> List[Part]:
    return _parts_adapter.validate_json(data)


def normalize_key(key: str) -> str:
    return (key or "").strip().upper()


class CatalogStore:
    """
    State:
        _parts: ordered Part records (import order)
        _index: {normalized part_no -> position in _parts}, first wins
        _lock: guards mutate-then-persist
    """

    def __init__(self, slots: SlotStore, key: str, parts: Sequence[Part] = ()) -> None:
        self.slots = slots
        self.key = key
        self._lock = threading.Lock()
        self._parts: List[Part] = list(parts)
        self._index: Dict[str, int] = self._build_index(self._parts)

    # -------- loading --------

    @classmethod
    def load(cls, slots: SlotStore, key: str, fallback_csv: str) -> "CatalogStore":
        """
        Restore the catalog from its slot.

        An absent, unreadable or malformed slot falls back to the bundled
        sample, which is then persisted as the new baseline.
        """
        try:
            raw = slots.load(key)
        except StorageError as e:
            log.warning("catalog_load_failed", key=key, error=str(e))
            raw = None

        if raw is not None:
            try:
                parts = deserialize_parts(raw)
                log.info("catalog_loaded", key=key, parts=len(parts))
                return cls(slots, key, parts)
            except ValidationError as e:
                log.warning("catalog_slot_malformed", key=key, errors=e.error_count())

        store = cls(slots, key)
        store.replace_all(parse_catalog_csv(fallback_csv))
        log.info("catalog_seeded_from_sample", key=key, parts=len(store))
        return store

    # -------- mutations --------

    def replace_all(self, parts: Sequence[Part]) -> List[str]:
        """
        Swap in a whole new catalog and persist it.

        Returns the duplicated part numbers (empty list when keys are unique).
        Duplicates are kept; lookups return the first of them.
        """
        new_parts = list(parts)
        duplicates = find_duplicate_part_numbers(new_parts)
        if duplicates:
            log.warning("catalog_duplicate_part_numbers", count=len(duplicates), part_nos=duplicates[:20])

        with self._lock:
            self._parts = new_parts
            self._index = self._build_index(new_parts)
            self._persist()
        return duplicates

    def update_location(self, part_no: str, new_location: str) -> Optional[Part]:
        """
        Replace the location of the first record whose own part_no equals
        `part_no`. Position and every other field are preserved.

        Returns the updated Part, or None if no record carries that part_no.
        """
        with self._lock:
            pos = next((i for i, p in enumerate(self._parts) if p.part_no == part_no), None)
            if pos is None:
                return None
            updated = self._parts[pos].model_copy(update={"location": new_location})
            self._parts[pos] = updated
            self._persist()
        log.info("catalog_location_updated", part_no=part_no, location=new_location)
        return updated

    # -------- reads --------

    def find_by_part_no(self, key: str) -> Optional[Part]:
        pos = self._index.get(normalize_key(key))
        if pos is None:
            return None
        return self._parts[pos]

    def all(self) -> Tuple[Part, ...]:
        return tuple(self._parts)

    def preview(self, limit: int = 100) -> Tuple[Part, ...]:
        return tuple(self._parts[:limit])

    def __len__(self) -> int:
        return len(self._parts)

    # -------- internals --------

    @staticmethod
    def _build_index(parts: Sequence[Part]) -> Dict[str, int]:
        index: Dict[str, int] = {}
        for i, p in enumerate(parts):
            index.setdefault(p.key, i)
        return index

    def _persist(self) -> None:
        try:
            self.slots.save(self.key, serialize_parts(self._parts))
        except StorageError as e:
            log.error("catalog_persist_failed", key=self.key, error=str(e))
