from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class InventoryRecord(BaseModel):
    """Stock level and price for a single product."""
    id: Optional[int] = Field(default=None, description="Identifier assigned by the inventory store")
    product_code: str = Field(description="Unique product code")
    product_name: str = Field(description="Product name")
    available_quantity: int = Field(description="Units currently available")
    price: Decimal = Field(description="Unit price")
