from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from .orders import OrderStatus


class OrderItemRequest(BaseModel):
    """A line item as submitted by the customer."""
    product_code: str = Field(description="Product code")
    quantity: int = Field(description="Requested quantity")
    price: Decimal = Field(description="Unit price")


class OrderRequest(BaseModel):
    """Inbound order submission."""
    customer_id: str = Field(description="Customer placing the order")
    items: List[OrderItemRequest] = Field(min_length=1, description="Line items, at least one")
    total_amount: Decimal = Field(description="Total amount claimed by the requester")


class OrderReceipt(BaseModel):
    """Returned to the submitter once the order is stored and queued."""
    order_id: int = Field(description="Identifier of the stored order")
    customer_id: str = Field(description="Customer who placed the order")
    total_amount: Decimal = Field(description="Total amount as submitted")
    status: OrderStatus = Field(description="Status at the time of the receipt")
    created_at: datetime = Field(description="Creation timestamp")
    message: str = Field(default="Order received and queued for processing")
