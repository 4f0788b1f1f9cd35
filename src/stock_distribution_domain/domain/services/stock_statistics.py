"""Totals and low-stock alerts over aggregated stock."""

from src.common.dtos.stock_dtos import LowStockAlertDTO, Quantity, StockSummaryDTO
from src.stock_distribution_domain.domain.entities.aggregated_stock_entry import AggregatedStockEntry
from src.stock_distribution_domain.domain.entities.stock_matrix import StockMatrix


def summarize_matrix(matrix: StockMatrix) -> StockSummaryDTO:
    """Row, column and grand totals of the matrix as displayed."""
    product_totals: dict[str, Quantity] = {product: 0 for product in matrix.products}
    warehouse_totals: dict[str, Quantity] = {warehouse: 0 for warehouse in matrix.warehouses}
    populated_cells = 0

    for product, warehouse, entry in matrix.cells():
        if entry is None:
            continue
        product_totals[product] += entry.current_quantity
        warehouse_totals[warehouse] += entry.current_quantity
        if entry.current_quantity > 0:
            populated_cells += 1

    return StockSummaryDTO(
        total_quantity=sum(product_totals.values()),
        product_totals=product_totals,
        warehouse_totals=warehouse_totals,
        product_count=len(matrix.products),
        warehouse_count=len(matrix.warehouses),
        populated_cells=populated_cells,
        total_cells=matrix.cell_count,
    )


def find_low_stock_alerts(entries: list[AggregatedStockEntry]) -> list[LowStockAlertDTO]:
    """
    Products whose stock summed over all warehouses is below their minimum reorder level.

    Products are grouped by id. Products without a reorder level are never reported.
    """
    totals: dict[str, Quantity] = {}
    first_seen: dict[str, AggregatedStockEntry] = {}
    for entry in entries:
        totals[entry.raw_material_id] = totals.get(entry.raw_material_id, 0) + entry.current_quantity
        first_seen.setdefault(entry.raw_material_id, entry)

    alerts = []
    for raw_material_id, entry in first_seen.items():
        if entry.min_reorder_level is None:
            continue
        available = totals[raw_material_id]
        if available < entry.min_reorder_level:
            alerts.append(
                LowStockAlertDTO(
                    raw_material_id=raw_material_id,
                    name=entry.product_name,
                    available=available,
                    min_reorder_level=entry.min_reorder_level,
                )
            )
    return alerts
