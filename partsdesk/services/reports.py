# partsdesk/services/reports.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.catalog import Part
from ..models.orders import Order, OrderStatus

SHORTAGE = "Shortage"
HEALTHY = "Healthy"


@dataclass
class DashboardStats:
    total_orders: int
    orders_by_status: Dict[str, int]
    pending_orders: int
    parts_in_catalog: int
    high_demand_parts: int


@dataclass
class CriticalStock:
    items: List[Part]
    total: int


@dataclass
class ShortageRow:
    part_no: str
    part_name: str
    location: str
    on_hand: float
    due_in: float
    on_order: float
    available: float
    sys_gen_stock: float
    status: str  # "Shortage" | "Healthy"
    shortage_qty: float = 0.0


def dashboard_stats(
    parts: Sequence[Part],
    orders: Sequence[Order],
    high_demand_amd3: float = 10.0,
) -> DashboardStats:
    """
    Headline counts for the dashboard:

      - total orders and orders per status (every status listed, zero-filled)
      - parts in catalog
      - high-demand parts (amd3 strictly above the threshold)
    """
    by_status = {s.value: 0 for s in OrderStatus}
    for o in orders:
        by_status[o.status.value] += 1

    return DashboardStats(
        total_orders=len(orders),
        orders_by_status=by_status,
        pending_orders=by_status[OrderStatus.PENDING.value],
        parts_in_catalog=len(parts),
        high_demand_parts=sum(1 for p in parts if p.amd3 > high_demand_amd3),
    )


def orders_by_type(orders: Iterable[Order]) -> List[Dict]:
    """Chart buckets [{"name": <order type>, "value": <count>}] in first-seen order."""
    counts: Dict[str, int] = {}
    for o in orders:
        counts[o.order_type.value] = counts.get(o.order_type.value, 0) + 1
    return [{"name": k, "value": v} for k, v in counts.items()]


def critical_stock(parts: Sequence[Part], max_on_hand: float = 2.0, limit: int = 10) -> CriticalStock:
    """Parts with on_hand at or below the threshold; preview capped at `limit`, total uncapped."""
    hits = [p for p in parts if p.on_hand <= max_on_hand]
    return CriticalStock(items=hits[:limit], total=len(hits))


def classify_shortage(part: Part) -> ShortageRow:
    available = part.total_available
    short = available < part.sys_gen_stock
    return ShortageRow(
        part_no=part.part_no,
        part_name=part.part_name,
        location=part.location,
        on_hand=part.on_hand,
        due_in=part.due_in,
        on_order=part.on_order,
        available=available,
        sys_gen_stock=part.sys_gen_stock,
        status=SHORTAGE if short else HEALTHY,
        shortage_qty=part.sys_gen_stock - available if short else 0.0,
    )


def shortage_report(parts: Sequence[Part], query: str = "", only_shortages: bool = False) -> List[ShortageRow]:
    """
    Compare available stock (on hand + due in + on order) against the
    system-generated stock level for every part.

    `query` narrows rows by part number after classification.
    """
    rows = [classify_shortage(p) for p in parts]
    if only_shortages:
        rows = [r for r in rows if r.status == SHORTAGE]
    return filter_by_part_no(rows, query)


def low_stock(parts: Sequence[Part], max_on_hand: float = 5.0) -> List[Part]:
    return [p for p in parts if p.on_hand <= max_on_hand]


def high_stock(parts: Sequence[Part], min_on_hand: float = 50.0) -> List[Part]:
    return [p for p in parts if p.on_hand >= min_on_hand]


def high_value(parts: Sequence[Part], top_n: int = 20) -> List[Part]:
    # sorted() is stable, so equal MAV keeps catalog order
    return sorted(parts, key=lambda p: p.mav, reverse=True)[:top_n]


def filter_by_part_no(rows: Sequence, query: str) -> List:
    """Case-insensitive substring match on part_no; blank query keeps everything."""
    needle = (query or "").strip().upper()
    if not needle:
        return list(rows)
    return [r for r in rows if needle in r.part_no.upper()]


def filter_orders(
    orders: Iterable[Order],
    user: Optional[str] = None,
    vehicle: Optional[str] = None,
    date: Optional[str] = None,
) -> List[Order]:
    """
    Report filters:
      - user: exact user_name
      - vehicle: substring of vehicle_number (query upper-cased)
      - date: ISO date prefix (YYYY-MM-DD) of the order timestamp
    """
    vehicle_q = (vehicle or "").strip().upper()
    out = []
    for o in orders:
        if user and o.user_name != user:
            continue
        if vehicle_q and vehicle_q not in o.vehicle_number:
            continue
        if date and not o.timestamp.isoformat().startswith(date):
            continue
        out.append(o)
    return out


def unique_users(orders: Iterable[Order]) -> List[str]:
    seen: Dict[str, None] = {}
    for o in orders:
        seen.setdefault(o.user_name, None)
    return list(seen)
