# partsdesk/services/storage.py
"""
Persistence slots.

The catalog and the order ledger are each saved as one serialized blob under a
fixed key. Anything that can load and save bytes by key can back them:

    load(key) -> bytes | None     (None = slot absent)
    save(key, data) -> None       (full replace)

Backends raise StorageError for their own I/O failures; callers decide how
much of that to tolerate.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..models.storage import StorageSlot


class StorageError(Exception):
    """A slot backend failed to read or write."""


class SlotStore(Protocol):
    def load(self, key: str) -> Optional[bytes]: ...

    def save(self, key: str, data: bytes) -> None: ...


class MemorySlotStore:
    """Dict-backed slots, used in tests and with PARTSDESK_STORAGE=memory."""

    def __init__(self, initial: Dict[str, bytes] | None = None) -> None:
        self.slots: Dict[str, bytes] = dict(initial or {})
        self.writes = 0

    def load(self, key: str) -> Optional[bytes]:
        return self.slots.get(key)

    def save(self, key: str, data: bytes) -> None:
        self.slots[key] = bytes(data)
        self.writes += 1


class SqlSlotStore:
    """Slots kept as rows of the StorageSlot table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def load(self, key: str) -> Optional[bytes]:
        try:
            with Session(self.engine) as session:
                row = session.get(StorageSlot, key)
                return bytes(row.payload) if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"could not read slot {key!r}: {e}") from e

    def save(self, key: str, data: bytes) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(StorageSlot, key)
                if row is None:
                    row = StorageSlot(key=key, payload=data)
                else:
                    row.payload = data
                    row.updated_at = datetime.now(timezone.utc)
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"could not write slot {key!r}: {e}") from e


_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileSlotStore:
    """One `<key>.json` file per slot inside a directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_SAFE_KEY.sub('_', key)}.json"

    def load(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"could not read {path}: {e}") from e

    def save(self, key: str, data: bytes) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"could not write {path}: {e}") from e
