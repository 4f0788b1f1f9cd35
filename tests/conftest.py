# tests/conftest.py
import pytest
from unittest.mock import Mock
from datetime import datetime
import pytz

from src.stock_distribution_domain.application.stock_distribution_service import StockDistributionApplicationService
from src.stock_distribution_domain.infrastructure.api_clients.batchflow_stock_api_client import (
    BatchFlowStockApiClient,
)
from src.common.dtos.stock_dtos import RawMaterialDTO, StockRecordBatchDTO, StockRecordDTO, WarehouseDTO
from src.common.config.settings import settings


@pytest.fixture(autouse=True)
def mock_settings_api_info(mocker) -> None:
    """Pins the BatchFlow API settings so tests never depend on a local .env."""
    mocker.patch.object(settings, "BATCHFLOW_API_BASE_URL", "https://batchflow.test/api")
    mocker.patch.object(settings, "BATCHFLOW_API_TOKEN", "test_token")
    mocker.patch.object(settings, "BATCHFLOW_API_TIMEOUT", "30")


@pytest.fixture
def mock_stock_api_client() -> Mock:
    """Mock for BatchFlowStockApiClient."""
    return Mock(spec=BatchFlowStockApiClient)


@pytest.fixture
def stock_distribution_service(mock_stock_api_client) -> StockDistributionApplicationService:
    """Instance of StockDistributionApplicationService with a mocked stock source."""
    return StockDistributionApplicationService(stock_repo=mock_stock_api_client)


def make_record(
    material_id: str,
    material_name: str,
    warehouse_id: str,
    warehouse_name: str,
    quantity: float,
    unit: str | None = "kg",
    min_reorder_level: float | None = None,
) -> StockRecordDTO:
    return StockRecordDTO(
        raw_material=RawMaterialDTO(
            id=material_id, name=material_name, unit_of_measurement=unit, min_reorder_level=min_reorder_level
        ),
        warehouse=WarehouseDTO(id=warehouse_id, name=warehouse_name),
        current_quantity=quantity,
    )


@pytest.fixture
def record_factory():
    """Factory for StockRecordDTOs with a kilogram unit by default."""
    return make_record


@pytest.fixture
def sample_stock_payload() -> list[dict]:
    """Sample response body of GET /raw/stock."""
    return [
        {
            "rawMaterial": {"id": "A", "name": "Flour", "unitOfMeasurement": "kg", "minReorderLevel": 100},
            "warehouse": {"id": "W1", "name": "North", "location": "Hall 1"},
            "currentQuantity": 50,
        },
        {
            "rawMaterial": {"id": "A", "name": "Flour", "unitOfMeasurement": "kg", "minReorderLevel": 100},
            "warehouse": {"id": "W1", "name": "North", "location": "Hall 1"},
            "currentQuantity": 30,
        },
        {
            "rawMaterial": {"id": "B", "name": "Sugar", "unitOfMeasurement": "kg"},
            "warehouse": {"id": "W2", "name": "South"},
            "quantity": 20,
        },
    ]


@pytest.fixture
def sample_stock_records() -> list[StockRecordDTO]:
    """Parsed equivalent of sample_stock_payload."""
    return [
        make_record("A", "Flour", "W1", "North", 50, min_reorder_level=100),
        make_record("A", "Flour", "W1", "North", 30, min_reorder_level=100),
        make_record("B", "Sugar", "W2", "South", 20),
    ]


@pytest.fixture
def sample_stock_batch(sample_stock_records) -> StockRecordBatchDTO:
    return StockRecordBatchDTO(
        records=sample_stock_records,
        skipped_count=0,
        source="https://batchflow.test/api/raw/stock",
        fetched_at=datetime(2024, 5, 1, 9, 30, tzinfo=pytz.utc),
    )
