from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List

import pandas as pd

from ..models import InventoryRecord
from .memory_backend import InMemoryInventoryStore
from ...config import get_config

INVENTORY_FILE = "inventory.csv"
INVENTORY_COLUMNS = ["product_code", "product_name", "available_quantity", "price"]


def resolve_data_dir(data_dir: str | Path = None) -> Path:
    """Resolve `data_dir` against the repository root when it is relative."""
    if data_dir is None:
        data_dir = get_config().data_dir

    path = Path(data_dir)
    if path.is_absolute():
        return path

    # Look up the directory tree for pyproject.toml
    current = Path.cwd()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent / path
    # Fallback to current directory
    return current / path


class CsvInventoryStore(InMemoryInventoryStore):
    """
    CSV-backed inventory.
    - Loads `inventory.csv` from `data_dir` once at construction.
    - Lookups are served from memory; `save()` writes the current records back.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        super().__init__()
        self.data_dir = resolve_data_dir(data_dir)
        for record in self._load_records(self.data_dir):
            self.persist(record)

    @property
    def path(self) -> Path:
        return self.data_dir / INVENTORY_FILE

    @staticmethod
    def _load_records(data_dir: Path) -> List[InventoryRecord]:
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m orderflow seed --out {data_dir}\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        path = data_dir / INVENTORY_FILE
        if not path.exists():
            raise FileNotFoundError(
                f"Required CSV file missing in {data_dir}: {INVENTORY_FILE}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m orderflow seed --out {data_dir}\n"
                f"  2. Set INVENTORY_SOURCE=memory to use the built-in sample inventory"
            )

        try:
            # Prices stay strings until converted to Decimal, never floats
            df = pd.read_csv(path, dtype={"product_code": str, "product_name": str, "price": str})
        except Exception as e:
            raise RuntimeError(
                f"Error reading {path}: {e}\n"
                f"Please check that the CSV file is valid and readable."
            ) from e

        missing = [c for c in INVENTORY_COLUMNS if c not in df.columns]
        if missing:
            raise RuntimeError(f"{path} is missing columns: {', '.join(missing)}")

        records = []
        for row in df[INVENTORY_COLUMNS].itertuples(index=False):
            try:
                price = Decimal(row.price.strip())
            except (AttributeError, InvalidOperation) as e:
                raise RuntimeError(f"Invalid price {row.price!r} for {row.product_code} in {path}") from e
            records.append(InventoryRecord(
                product_code=row.product_code,
                product_name=row.product_name,
                available_quantity=int(row.available_quantity),
                price=price,
            ))
        return records

    def save(self) -> Path:
        """Write the current records to `inventory.csv`, creating the directory if needed."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        write_inventory_frame(self.list_all(), self.path)
        return self.path


def write_inventory_frame(records: List[InventoryRecord], path: Path) -> None:
    df = pd.DataFrame(
        [
            {
                "product_code": r.product_code,
                "product_name": r.product_name,
                "available_quantity": r.available_quantity,
                "price": str(r.price),
            }
            for r in records
        ],
        columns=INVENTORY_COLUMNS,
    )
    df.to_csv(path, index=False)
