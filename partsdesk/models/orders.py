from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OrderType(str, Enum):
    """Closed set of order types."""
    URGENT = "Urgent"
    STOCK = "Stock"
    VOR = "VOR"  # vehicle off road
    ACCESSORIES = "Accessories"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Order(BaseModel):
    """
    A single ledger entry.

    part_no / part_name / location are copied from the matched Part when the
    order is created; later catalog edits never reach back into the ledger.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    user_name: str
    vehicle_number: str
    order_type: OrderType
    part_no: str
    part_name: str
    location: str
    quantity: int = Field(ge=1)
    status: OrderStatus = OrderStatus.PENDING
