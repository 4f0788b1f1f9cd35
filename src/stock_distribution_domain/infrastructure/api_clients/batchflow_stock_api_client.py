"""Client for the BatchFlow current stock distribution endpoint."""

import logging
from datetime import datetime
from typing import Any, Optional

import pytz
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.common.config.settings import settings
from src.common.dtos.stock_dtos import StockRecordBatchDTO
from src.common.exceptions.custom_exceptions import APIError, ConfigurationError
from src.stock_distribution_domain.domain.repositories.stock_record_repository import (
    IStockRecordRepository,
    parse_stock_payload,
)

logger = logging.getLogger(__name__)

STOCK_DISTRIBUTION_PATH = "/raw/stock"


def _parse_timeout(value: Any) -> float:
    """Reads a request timeout in seconds; it must be a positive number."""
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"BATCHFLOW_API_TIMEOUT is not a number: {value!r}", e)
    if not timeout > 0:
        raise ConfigurationError(f"BATCHFLOW_API_TIMEOUT must be positive, got {value!r}")
    return timeout


class BatchFlowStockApiClient(IStockRecordRepository):
    def __init__(
        self, base_url: Optional[str] = None, token: Optional[str] = None, timeout: Optional[float] = None
    ) -> None:
        self.base_url = (base_url or settings.BATCHFLOW_API_BASE_URL or "").rstrip("/")
        if not self.base_url:
            raise ConfigurationError("BATCHFLOW_API_BASE_URL is not set in environment variables.")
        self.token = token if token is not None else settings.BATCHFLOW_API_TOKEN
        self.timeout = _parse_timeout(timeout if timeout is not None else settings.BATCHFLOW_API_TIMEOUT)

        # Connection pooling only: the distribution load is a single attempt
        self.session = requests.Session()
        adapter = HTTPAdapter(max_retries=Retry(total=0), pool_connections=4, pool_maxsize=4)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def url(self) -> str:
        return f"{self.base_url}{STOCK_DISTRIBUTION_PATH}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_current_stock(self) -> list[Any]:
        """
        Fetches the raw JSON array of current stock records.
        """
        try:
            response = self.session.get(self.url, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise APIError(f"Stock distribution request timed out after {self.timeout}s", original_exception=e)
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError("Stock distribution request was rejected", original_exception=e, status_code=status_code)
        except requests.exceptions.RequestException as e:
            raise APIError("Error fetching stock distribution", original_exception=e)

        try:
            payload = response.json()
        except ValueError as e:
            raise APIError(
                f"Failed to decode stock distribution JSON. Raw response: {response.text[:200]}",
                original_exception=e,
                status_code=response.status_code,
            )

        if not isinstance(payload, list):
            raise APIError(
                f"Expected a JSON array of stock records, got {type(payload).__name__}",
                status_code=response.status_code,
            )
        return payload

    def fetch_stock_records(self) -> StockRecordBatchDTO:
        logger.info(f"Fetching current stock distribution from {self.url}")
        payload = self.get_current_stock()
        records, skipped = parse_stock_payload(payload, source=self.url)
        logger.info(f"Received {len(payload)} stock record(s), {len(records)} usable.")
        return StockRecordBatchDTO(
            records=records, skipped_count=skipped, source=self.url, fetched_at=datetime.now(pytz.utc)
        )

    def close(self) -> None:
        self.session.close()

    def __del__(self) -> None:
        """Clean up the session when the object is destroyed."""
        if hasattr(self, "session"):
            self.session.close()
