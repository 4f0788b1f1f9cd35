"""Aggregated stock entry entity."""

from dataclasses import dataclass
from typing import Optional

from src.common.dtos.stock_dtos import Quantity


@dataclass
class AggregatedStockEntry:
    """Total stock of one product in one warehouse, summed over every raw record sharing the key."""

    raw_material_id: str
    product_name: str
    warehouse_id: str
    warehouse_name: str
    unit_of_measurement: Optional[str] = None
    location: Optional[str] = None
    min_reorder_level: Optional[Quantity] = None
    current_quantity: Quantity = 0
    record_count: int = 0

    @property
    def key(self) -> str:
        return f"{self.raw_material_id}_{self.warehouse_id}"
