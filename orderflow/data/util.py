from __future__ import annotations

from typing import Literal

from .backends.csv_backend import CsvInventoryStore
from .backends.memory_backend import InMemoryInventoryStore, InMemoryOrderStore
from .interface import InventoryStore, OrderStore
from ..config import get_config


def get_inventory_store(kind: Literal["memory", "csv"] = None) -> InventoryStore:
    config = get_config()
    kind = kind or config.inventory_source
    if kind == "memory":
        return InMemoryInventoryStore()
    if kind == "csv":
        # Reads from configured CSV folder
        return CsvInventoryStore(data_dir=config.data_dir)
    raise ValueError(f"Unknown inventory store kind: {kind}")


def get_order_store() -> OrderStore:
    return InMemoryOrderStore()
