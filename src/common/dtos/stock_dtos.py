"""Data Transfer Objects for stock distribution data."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from src.common.exceptions.custom_exceptions import MalformedRecordError

Quantity = int | float


def _coerce_number(value: Any, field_name: str) -> Quantity:
    """Accepts ints, floats and numeric strings (decimal columns arrive as strings)."""
    if isinstance(value, bool):
        raise MalformedRecordError(f"'{field_name}' must be numeric, got a boolean")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as e:
            raise MalformedRecordError(f"'{field_name}' is not a number: {value!r}", original_exception=e)
    else:
        raise MalformedRecordError(f"'{field_name}' must be numeric, got {type(value).__name__}")

    if isinstance(number, float) and not math.isfinite(number):
        raise MalformedRecordError(f"'{field_name}' is not finite: {value!r}")
    return number


def resolve_quantity(data: dict[str, Any]) -> Quantity:
    """
    Returns the canonical quantity of a stock payload.

    ``currentQuantity`` is the canonical field. Older feeds send ``quantity``
    instead; it is used only when ``currentQuantity`` is absent or null. A
    record carrying neither counts as zero.
    """
    raw_value = data.get("currentQuantity")
    field_name = "currentQuantity"
    if raw_value is None:
        raw_value = data.get("quantity")
        field_name = "quantity"
    if raw_value is None:
        return 0

    quantity = _coerce_number(raw_value, field_name)
    if quantity < 0:
        raise MalformedRecordError(f"'{field_name}' cannot be negative: {quantity}")
    return quantity


def _required_reference(data: dict[str, Any], key: str) -> dict[str, Any]:
    reference = data.get(key)
    if not isinstance(reference, dict):
        raise MalformedRecordError(f"missing '{key}'")
    if reference.get("id") is None or reference.get("name") is None:
        raise MalformedRecordError(f"'{key}' requires both 'id' and 'name'")
    return reference


@dataclass(frozen=True)
class RawMaterialDTO:
    """DTO for the product side of a stock record."""

    id: str
    name: str
    unit_of_measurement: Optional[str] = None
    min_reorder_level: Optional[Quantity] = None


@dataclass(frozen=True)
class WarehouseDTO:
    """DTO for the storage location side of a stock record."""

    id: str
    name: str
    location: Optional[str] = None


@dataclass
class StockRecordDTO:
    """DTO for one raw stock record (one lot of a product in a warehouse)."""

    raw_material: RawMaterialDTO
    warehouse: WarehouseDTO
    current_quantity: Quantity = 0

    @property
    def key(self) -> str:
        return f"{self.raw_material.id}_{self.warehouse.id}"

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "StockRecordDTO":
        """
        Creates a StockRecordDTO from one element of the stock distribution feed.

        Raises MalformedRecordError when the element is not an object, lacks a
        ``rawMaterial`` or ``warehouse`` reference, or carries a quantity that is
        not a non-negative number.
        """
        if not isinstance(data, dict):
            raise MalformedRecordError(f"expected an object, got {type(data).__name__}")

        material = _required_reference(data, "rawMaterial")
        warehouse = _required_reference(data, "warehouse")

        min_reorder_level = material.get("minReorderLevel")
        if min_reorder_level is not None:
            try:
                min_reorder_level = _coerce_number(min_reorder_level, "minReorderLevel")
            except MalformedRecordError:
                # A bad reorder level only disables the low-stock alert
                min_reorder_level = None

        return cls(
            raw_material=RawMaterialDTO(
                id=str(material["id"]),
                name=str(material["name"]),
                unit_of_measurement=material.get("unitOfMeasurement"),
                min_reorder_level=min_reorder_level,
            ),
            warehouse=WarehouseDTO(
                id=str(warehouse["id"]),
                name=str(warehouse["name"]),
                location=warehouse.get("location"),
            ),
            current_quantity=resolve_quantity(data),
        )


@dataclass
class StockRecordBatchDTO:
    """DTO for the parsed result of one stock distribution fetch."""

    records: list[StockRecordDTO] = field(default_factory=list)
    skipped_count: int = 0
    source: str | None = None
    fetched_at: datetime | None = None


@dataclass
class HeatmapCellDTO:
    """DTO for one coloured cell of the product x warehouse grid."""

    product: str
    warehouse: str
    quantity: Quantity
    normalized: float
    color: str
    is_empty: bool
    unit_of_measurement: Optional[str] = None


@dataclass
class StockSummaryDTO:
    """DTO with the totals shown next to the heatmap."""

    total_quantity: Quantity = 0
    product_totals: dict[str, Quantity] = field(default_factory=dict)
    warehouse_totals: dict[str, Quantity] = field(default_factory=dict)
    product_count: int = 0
    warehouse_count: int = 0
    populated_cells: int = 0
    total_cells: int = 0


@dataclass
class LowStockAlertDTO:
    """DTO for a product whose total stock is below its minimum reorder level."""

    raw_material_id: str
    name: str
    available: Quantity
    min_reorder_level: Quantity
