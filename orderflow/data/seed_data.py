"""
seed_data.py

Sample inventory used at startup and for local CSV data.

Run:
  python -m orderflow seed --out sample_data
"""

from __future__ import annotations

import argparse
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from .backends.csv_backend import INVENTORY_FILE, resolve_data_dir, write_inventory_frame
from .interface import InventoryStore
from .models import InventoryRecord
from ..config import get_config
from ..logging import get_logger

SAMPLE_INVENTORY: List[InventoryRecord] = [
    InventoryRecord(product_code="SKU-001", product_name="Premium Wireless Headphones",
                    available_quantity=100, price=Decimal("49.99")),
    InventoryRecord(product_code="SKU-002", product_name="USB-C Charging Cable",
                    available_quantity=250, price=Decimal("19.50")),
    InventoryRecord(product_code="PROD-001", product_name="Laptop Stand",
                    available_quantity=50, price=Decimal("50.00")),
    InventoryRecord(product_code="PROD-002", product_name="Keyboard",
                    available_quantity=75, price=Decimal("30.00")),
]


def seed_inventory(store: InventoryStore, records: Optional[List[InventoryRecord]] = None) -> int:
    """Insert sample inventory if the store is empty.

    Args:
        store (InventoryStore): Store to seed.
        records (list[InventoryRecord], optional): Records to insert. Defaults to SAMPLE_INVENTORY.
    Returns:
        int: Number of records inserted; 0 when the store already had data.
    """
    logger = get_logger(__name__)
    logger.info("Initializing inventory data...")

    existing = store.count()
    if existing > 0:
        logger.info(f"Inventory already contains {existing} items, skipping initialization")
        return 0

    records = SAMPLE_INVENTORY if records is None else records
    for record in records:
        store.persist(record)

    logger.info(f"Inventory initialized with {len(records)} products")
    logger.info(f"Available products: {', '.join(r.product_code for r in records)}")
    return len(records)


def write_inventory_csv(out_dir: str | Path, records: Optional[List[InventoryRecord]] = None) -> Path:
    """Write sample inventory to `<out_dir>/inventory.csv` and return the file path."""
    out = resolve_data_dir(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / INVENTORY_FILE
    write_inventory_frame(SAMPLE_INVENTORY if records is None else records, path)
    return path


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--out", default=None, help="Output folder for inventory.csv (default: DATA_DIR)")


def run(args: argparse.Namespace) -> int:
    out = args.out or get_config().data_dir
    path = write_inventory_csv(out)
    print(f"Wrote {len(SAMPLE_INVENTORY)} inventory records to {path}")
    return 0
