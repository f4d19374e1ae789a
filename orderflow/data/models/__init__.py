from .orders import (
    Order,
    OrderItem,
    OrderState,
    OrderStatus,
    utc_now,
)

from .inventory import InventoryRecord
from .requests import (
    OrderItemRequest,
    OrderRequest,
    OrderReceipt,
)

__all__ = [
    # Orders
    "Order",
    "OrderItem",
    "OrderState",
    "OrderStatus",
    "utc_now",
    # Inventory
    "InventoryRecord",
    # Requests / receipts
    "OrderItemRequest",
    "OrderRequest",
    "OrderReceipt",
]
