# partsdesk/api/orders.py
"""
Lookup + order confirm endpoints. Each request runs a fresh lookup session
against the shared catalog / ledger.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, StrictInt, StrictStr

from ..models.orders import Order, OrderType
from ..models.users import User
from ..services.lookup import LookupState, SessionMode
from ..services.reports import filter_orders, unique_users
from ..services.state import DeskState
from .deps import get_desk, require_user

router = APIRouter(prefix="/api", tags=["orders"])


class ConfirmRequest(BaseModel):
    part_no: str
    quantity: StrictStr | StrictInt
    mode: SessionMode = SessionMode.STOCK_AUDIT
    order_type: Optional[OrderType] = None
    vehicle_number: str = ""
    override_location: bool = False
    new_location: str = ""


@router.get("/lookup")
def lookup(q: str = "", mode: SessionMode = SessionMode.STOCK_AUDIT, desk: DeskState = Depends(get_desk)):
    session = desk.new_session(mode)
    state = session.set_query(q)
    return {
        "query": q,
        "state": state.value,
        "has_input": session.has_input,
        "part": session.matched,
        "upcoming_stock": session.upcoming_stock,
        "total_available": session.total_available,
    }


@router.post("/orders", response_model=Order, status_code=201)
def confirm_order(
    request: ConfirmRequest,
    desk: DeskState = Depends(get_desk),
    user: User = Depends(require_user),
):
    session = desk.new_session(request.mode)
    state = session.set_query(request.part_no)
    if state != LookupState.MATCHED:
        raise HTTPException(status_code=409, detail=f"No such part: {request.part_no}")

    session.quantity = request.quantity
    if request.order_type is not None:
        session.set_order_type(request.order_type)
    session.vehicle_number = request.vehicle_number
    if request.override_location:
        session.set_location_override(request.new_location)

    order = session.confirm(user.user_name)
    if order is None:
        raise HTTPException(status_code=409, detail="Quantity must be a positive whole number")
    return order


@router.get("/orders")
def list_orders(
    user: Optional[str] = None,
    vehicle: Optional[str] = None,
    date: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    newest_first: bool = True,
    desk: DeskState = Depends(get_desk),
):
    orders = desk.ledger.newest_first() if newest_first else desk.ledger.all()
    rows = filter_orders(orders, user=user, vehicle=vehicle, date=date)
    return {
        "count": len(rows),
        "users": unique_users(desk.ledger.all()),
        "orders": rows,
    }
