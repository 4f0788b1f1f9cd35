# src/stock_distribution_domain/infrastructure/persistence/json_stock_record_repository.py
"""JSON export implementation of the stock record repository."""

import json
import logging
import os
from datetime import datetime

import pytz

from src.common.dtos.stock_dtos import StockRecordBatchDTO
from src.common.exceptions.custom_exceptions import ApplicationError
from src.stock_distribution_domain.domain.repositories.stock_record_repository import (
    IStockRecordRepository,
    parse_stock_payload,
)

logger = logging.getLogger(__name__)


class JsonStockRecordRepository(IStockRecordRepository):
    """Reads stock records from a JSON export of the stock distribution feed."""

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path

    def fetch_stock_records(self) -> StockRecordBatchDTO:
        logger.info(f"Loading stock distribution from {self.file_path}")
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ApplicationError(f"Stock export file not found at {self.file_path}", original_exception=e)
        except json.JSONDecodeError as e:
            raise ApplicationError(f"Error decoding stock export from {self.file_path}", original_exception=e)

        # Handle both a bare array and {"stocks": [...]}
        if isinstance(data, dict) and "stocks" in data:
            stock_list = data["stocks"]
        elif isinstance(data, list):
            stock_list = data
        else:
            raise ApplicationError("Invalid stock export format")

        if not isinstance(stock_list, list):
            raise ApplicationError("Invalid stock export format: 'stocks' must be an array")

        records, skipped = parse_stock_payload(stock_list, source=os.path.basename(self.file_path))
        return StockRecordBatchDTO(
            records=records, skipped_count=skipped, source=self.file_path, fetched_at=datetime.now(pytz.utc)
        )
