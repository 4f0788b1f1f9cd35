# src/stock_distribution_domain/domain/repositories/stock_record_repository.py
"""Stock record source interface."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

from src.common.dtos.stock_dtos import StockRecordBatchDTO, StockRecordDTO
from src.common.exceptions.custom_exceptions import MalformedRecordError

logger = logging.getLogger(__name__)


class IStockRecordRepository(ABC):

    @abstractmethod
    def fetch_stock_records(self) -> StockRecordBatchDTO:
        """Fetches the current stock distribution as parsed stock records."""
        pass


def parse_stock_payload(payload: Iterable[Any], source: str) -> tuple[list[StockRecordDTO], int]:
    """
    Parses every element of a stock feed, skipping the ones that are malformed.

    Returns the parsed records and the number of skipped elements. Skips are
    logged individually at debug level and as a total at warning level.
    """
    records: list[StockRecordDTO] = []
    skipped = 0

    for index, item in enumerate(payload):
        try:
            records.append(StockRecordDTO.from_api_response(item))
        except MalformedRecordError as e:
            skipped += 1
            logger.debug(f"Skipping stock record #{index} from {source}: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed stock record(s) from {source}.")
    return records, skipped
