"""Folds raw stock records into one entry per product/warehouse pair."""

import logging
from typing import Iterable

from src.common.dtos.stock_dtos import StockRecordDTO
from src.stock_distribution_domain.domain.entities.aggregated_stock_entry import AggregatedStockEntry

logger = logging.getLogger(__name__)


def aggregate_stock_records(records: Iterable[StockRecordDTO]) -> list[AggregatedStockEntry]:
    """
    Sums the quantities of all records sharing a (raw material id, warehouse id) pair.

    The first record seen for a key supplies the identifying fields (names,
    unit, location). Entries come back in first-seen key order.
    """
    # Grouped on the id pair: the joined "id_id" key is ambiguous when ids contain "_"
    aggregated: dict[tuple[str, str], AggregatedStockEntry] = {}

    for record in records:
        pair = (record.raw_material.id, record.warehouse.id)
        entry = aggregated.get(pair)
        if entry is None:
            entry = AggregatedStockEntry(
                raw_material_id=record.raw_material.id,
                product_name=record.raw_material.name,
                warehouse_id=record.warehouse.id,
                warehouse_name=record.warehouse.name,
                unit_of_measurement=record.raw_material.unit_of_measurement,
                location=record.warehouse.location,
                min_reorder_level=record.raw_material.min_reorder_level,
            )
            aggregated[pair] = entry

        entry.current_quantity += record.current_quantity
        entry.record_count += 1

    logger.debug(f"Aggregated stock records into {len(aggregated)} product/warehouse entries.")
    return list(aggregated.values())
