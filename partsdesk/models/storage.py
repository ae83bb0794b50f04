from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class StorageSlot(SQLModel, table=True):
    key: str = Field(primary_key=True)
    payload: bytes
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
