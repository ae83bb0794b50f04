# partsdesk/api/reports.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ..services import reports
from ..services.export import ORDER_COLUMNS, SHORTAGE_COLUMNS, messaging_link, share_summary, to_csv
from ..services.state import DeskState
from .deps import get_desk

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/dashboard")
def get_dashboard(desk: DeskState = Depends(get_desk)):
    """
    Headline counts for the dashboard, e.g.

    {"total_orders": 4, "orders_by_status": {"Pending": 1, ...},
     "pending_orders": 1, "parts_in_catalog": 14, "high_demand_parts": 5}
    """
    s = desk.settings
    stats = reports.dashboard_stats(desk.catalog.all(), desk.ledger.all(), s.high_demand_amd3)
    # Convert dataclasses to simple dicts for JSON
    return stats.__dict__


@router.get("/order-types")
def get_order_types(desk: DeskState = Depends(get_desk)):
    return reports.orders_by_type(desk.ledger.all())


@router.get("/critical-stock")
def get_critical_stock(desk: DeskState = Depends(get_desk)):
    s = desk.settings
    crit = reports.critical_stock(desk.catalog.all(), s.critical_on_hand, s.critical_preview)
    return {"total": crit.total, "items": crit.items}


@router.get("/shortage")
def get_shortage(
    q: str = "",
    only_shortages: bool = False,
    desk: DeskState = Depends(get_desk),
):
    rows = reports.shortage_report(desk.catalog.all(), query=q, only_shortages=only_shortages)
    return [r.__dict__ for r in rows]


@router.get("/shortage.csv", response_class=PlainTextResponse)
def export_shortage(q: str = "", only_shortages: bool = False, desk: DeskState = Depends(get_desk)):
    rows = reports.shortage_report(desk.catalog.all(), query=q, only_shortages=only_shortages)
    return PlainTextResponse(
        to_csv(rows, SHORTAGE_COLUMNS),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="shortage_report.csv"'},
    )


@router.get("/share")
def share_shortage(q: str = "", desk: DeskState = Depends(get_desk)):
    rows = reports.shortage_report(desk.catalog.all(), query=q)
    text = share_summary(rows)
    return {"text": text, "link": messaging_link(text)}


@router.get("/low-stock")
def get_low_stock(q: str = "", desk: DeskState = Depends(get_desk)):
    parts = reports.low_stock(desk.catalog.all(), desk.settings.low_stock_on_hand)
    return reports.filter_by_part_no(parts, q)


@router.get("/high-stock")
def get_high_stock(q: str = "", desk: DeskState = Depends(get_desk)):
    parts = reports.high_stock(desk.catalog.all(), desk.settings.high_stock_on_hand)
    return reports.filter_by_part_no(parts, q)


@router.get("/high-value")
def get_high_value(
    q: str = "",
    top_n: Optional[int] = Query(default=None, ge=1),
    desk: DeskState = Depends(get_desk),
):
    parts = reports.high_value(desk.catalog.all(), top_n or desk.settings.high_value_top_n)
    return reports.filter_by_part_no(parts, q)


@router.get("/orders.csv", response_class=PlainTextResponse)
def export_orders(
    user: Optional[str] = None,
    vehicle: Optional[str] = None,
    date: Optional[str] = None,
    desk: DeskState = Depends(get_desk),
):
    rows = reports.filter_orders(desk.ledger.newest_first(), user=user, vehicle=vehicle, date=date)
    return PlainTextResponse(
        to_csv(rows, ORDER_COLUMNS),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="orders_report.csv"'},
    )
