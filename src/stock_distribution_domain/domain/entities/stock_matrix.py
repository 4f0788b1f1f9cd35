"""Dense product x warehouse stock matrix."""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from src.common.dtos.stock_dtos import Quantity
from src.stock_distribution_domain.domain.entities.aggregated_stock_entry import AggregatedStockEntry


@dataclass
class StockMatrix:
    """
    Lookup table over every (product, warehouse) pair seen in the aggregated entries.

    ``matrix[product][warehouse]`` holds the matching entry or ``None`` when the
    pair never occurred. ``min_q``/``max_q`` is the normalisation range.
    """

    products: list[str] = field(default_factory=list)
    warehouses: list[str] = field(default_factory=list)
    matrix: dict[str, dict[str, Optional[AggregatedStockEntry]]] = field(default_factory=dict)
    min_q: Quantity = 0
    max_q: Quantity = 1

    @property
    def is_empty(self) -> bool:
        return not self.products or not self.warehouses

    @property
    def cell_count(self) -> int:
        return sum(len(row) for row in self.matrix.values())

    def entry(self, product: str, warehouse: str) -> Optional[AggregatedStockEntry]:
        return self.matrix.get(product, {}).get(warehouse)

    def quantity(self, product: str, warehouse: str) -> Quantity:
        """Quantity of a cell; absent pairs and unknown names count as zero."""
        found = self.entry(product, warehouse)
        return found.current_quantity if found else 0

    def normalize(self, quantity: Quantity) -> float:
        if self.max_q == self.min_q:
            return 0.0
        return (quantity - self.min_q) / (self.max_q - self.min_q)

    def cells(self) -> Iterator[tuple[str, str, Optional[AggregatedStockEntry]]]:
        """Yields every (product, warehouse, entry) triple in row-major order."""
        for product in self.products:
            for warehouse in self.warehouses:
                yield product, warehouse, self.entry(product, warehouse)
