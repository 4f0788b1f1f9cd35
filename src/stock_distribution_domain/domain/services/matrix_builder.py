"""Builds the dense product x warehouse matrix from aggregated entries."""

from typing import Optional

from src.stock_distribution_domain.domain.entities.aggregated_stock_entry import AggregatedStockEntry
from src.stock_distribution_domain.domain.entities.stock_matrix import StockMatrix


def build_stock_matrix(entries: list[AggregatedStockEntry]) -> StockMatrix:
    """
    Lays the entries out on the Cartesian product of distinct product and warehouse names.

    Axes keep first-seen order. If two entries carry the same pair of names,
    the first one occupies the cell. ``min_q`` is the smallest positive
    quantity floored at 0, ``max_q`` the largest quantity floored at 1.
    """
    products = list(dict.fromkeys(entry.product_name for entry in entries))
    warehouses = list(dict.fromkeys(entry.warehouse_name for entry in entries))

    by_names: dict[tuple[str, str], AggregatedStockEntry] = {}
    for entry in entries:
        by_names.setdefault((entry.product_name, entry.warehouse_name), entry)

    matrix: dict[str, dict[str, Optional[AggregatedStockEntry]]] = {
        product: {warehouse: by_names.get((product, warehouse)) for warehouse in warehouses}
        for product in products
    }

    quantities = [entry.current_quantity for entry in by_names.values()]
    positive = [q for q in quantities if q > 0]
    min_q = min([0, *positive])
    max_q = max([1, *quantities])

    return StockMatrix(products=products, warehouses=warehouses, matrix=matrix, min_q=min_q, max_q=max_q)
