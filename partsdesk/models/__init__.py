from .catalog import Part
from .orders import Order, OrderType, OrderStatus
from .users import User, Role
from .storage import StorageSlot

__all__ = [
    "Part",
    "Order",
    "OrderType",
    "OrderStatus",
    "User",
    "Role",
    "StorageSlot",
]
