# partsdesk/services/export.py
"""
One-way export of report rows: comma-separated text for download and a
short plain-text summary for sharing through a messaging link.
"""

from dataclasses import asdict, is_dataclass
from typing import Iterable, List, Optional, Sequence
from urllib.parse import quote

import pandas as pd
from pydantic import BaseModel

from .reports import SHORTAGE, ShortageRow

MESSAGING_URL_PREFIX = "https://wa.me/?text="

SHORTAGE_COLUMNS = [
    "part_no",
    "part_name",
    "location",
    "on_hand",
    "due_in",
    "on_order",
    "available",
    "sys_gen_stock",
    "status",
    "shortage_qty",
]

ORDER_COLUMNS = [
    "id",
    "timestamp",
    "user_name",
    "vehicle_number",
    "order_type",
    "part_no",
    "part_name",
    "location",
    "quantity",
    "status",
]


def _as_record(row) -> dict:
    if isinstance(row, BaseModel):
        return row.model_dump(mode="json")
    if is_dataclass(row):
        return asdict(row)
    return dict(row)


def to_csv(rows: Iterable, columns: Optional[Sequence[str]] = None) -> str:
    """Header row + one line per record, comma separated, no index column."""
    records = [_as_record(r) for r in rows]
    df = pd.DataFrame.from_records(records, columns=list(columns) if columns else None)
    return df.to_csv(index=False, lineterminator="\n")


def share_summary(rows: Sequence[ShortageRow], title: str = "Stock shortage report", max_lines: int = 10) -> str:
    """
    Short human-readable text, e.g.

        Stock shortage report
        Shortages: 2 of 5 parts
        - A2 Nut: short 2
    """
    shortages: List[ShortageRow] = [r for r in rows if r.status == SHORTAGE]
    lines = [title, f"Shortages: {len(shortages)} of {len(rows)} parts"]
    for r in shortages[:max_lines]:
        lines.append(f"- {r.part_no} {r.part_name}: short {_fmt(r.shortage_qty)}")
    if len(shortages) > max_lines:
        lines.append(f"... and {len(shortages) - max_lines} more")
    return "\n".join(lines)


def messaging_link(text: str) -> str:
    return MESSAGING_URL_PREFIX + quote(text, safe="")


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"
