# src/stock_distribution_domain/application/stock_distribution_service.py
"""Application service for the stock distribution heatmap."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from src.common.dtos.stock_dtos import HeatmapCellDTO, LowStockAlertDTO, StockRecordDTO, StockSummaryDTO
from src.common.exceptions.custom_exceptions import ApplicationError
from src.stock_distribution_domain.domain.entities.aggregated_stock_entry import AggregatedStockEntry
from src.stock_distribution_domain.domain.entities.heatmap_palette import DEFAULT_PALETTE, HeatmapPalette
from src.stock_distribution_domain.domain.entities.stock_matrix import StockMatrix
from src.stock_distribution_domain.domain.repositories.stock_record_repository import IStockRecordRepository
from src.stock_distribution_domain.domain.services.heatmap_colorizer import colorize_matrix
from src.stock_distribution_domain.domain.services.matrix_builder import build_stock_matrix
from src.stock_distribution_domain.domain.services.stock_aggregator import aggregate_stock_records
from src.stock_distribution_domain.domain.services.stock_statistics import find_low_stock_alerts, summarize_matrix

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load stock distribution"
NO_DATA_MESSAGE = "No stock data available"


class DistributionStatus(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class StockDistributionView:
    """Everything needed to display one load of the stock distribution."""

    status: DistributionStatus
    message: Optional[str] = None
    entries: list[AggregatedStockEntry] = field(default_factory=list)
    matrix: StockMatrix = field(default_factory=StockMatrix)
    cells: list[list[HeatmapCellDTO]] = field(default_factory=list)
    summary: StockSummaryDTO = field(default_factory=StockSummaryDTO)
    low_stock_alerts: list[LowStockAlertDTO] = field(default_factory=list)
    skipped_count: int = 0
    fetched_at: Optional[datetime] = None


class StockDistributionApplicationService:
    """Loads current stock and turns it into heatmap-ready data."""

    def __init__(self, stock_repo: IStockRecordRepository, palette: Optional[HeatmapPalette] = None) -> None:
        self.stock_repo = stock_repo
        self.palette = palette or DEFAULT_PALETTE

    def build_view(self, records: list[StockRecordDTO]) -> StockDistributionView:
        """Aggregates, lays out and colours already-parsed records."""
        entries = aggregate_stock_records(records)
        matrix = build_stock_matrix(entries)

        if matrix.is_empty:
            return StockDistributionView(status=DistributionStatus.EMPTY, message=NO_DATA_MESSAGE, matrix=matrix)

        return StockDistributionView(
            status=DistributionStatus.SUCCESS,
            entries=entries,
            matrix=matrix,
            cells=colorize_matrix(matrix, self.palette),
            summary=summarize_matrix(matrix),
            low_stock_alerts=find_low_stock_alerts(entries),
        )

    def load_distribution(self) -> StockDistributionView:
        """
        Fetches the stock feed once and builds the view.

        A failed fetch yields an ERROR view carrying a fixed user-facing message;
        the underlying error is logged. There is no retry.
        """
        try:
            batch = self.stock_repo.fetch_stock_records()
        except ApplicationError as e:
            logger.error(f"{LOAD_ERROR_MESSAGE}: {e}")
            return StockDistributionView(status=DistributionStatus.ERROR, message=LOAD_ERROR_MESSAGE)

        view = self.build_view(batch.records)
        view.skipped_count = batch.skipped_count
        view.fetched_at = batch.fetched_at

        if view.status is DistributionStatus.EMPTY:
            logger.warning(f"No stock data received from {batch.source}.")
        else:
            logger.info(
                f"Stock distribution ready: {view.summary.product_count} product(s) x "
                f"{view.summary.warehouse_count} warehouse(s), total quantity {view.summary.total_quantity}."
            )
        if view.low_stock_alerts:
            logger.warning(f"{len(view.low_stock_alerts)} product(s) below minimum reorder level.")
        return view
