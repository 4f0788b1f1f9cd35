# tests/test_stock_distribution_domain/test_infrastructure/test_batchflow_stock_api_client.py
"""Tests for the BatchFlowStockApiClient."""

import logging
from unittest.mock import Mock

import pytest
import requests

from src.common.config.settings import settings
from src.common.dtos.stock_dtos import StockRecordBatchDTO
from src.common.exceptions.custom_exceptions import APIError, ConfigurationError
from src.stock_distribution_domain.infrastructure.api_clients.batchflow_stock_api_client import (
    BatchFlowStockApiClient,
)

# mock_settings_api_info (autouse) and sample_stock_payload come from conftest.py


def _response(payload=None, status_code: int = 200) -> Mock:
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    mock_response.text = "<html>oops</html>"
    return mock_response


def test_get_current_stock_success(mocker, sample_stock_payload) -> None:
    """Tests a successful fetch of the raw stock array."""
    mock_response = _response(sample_stock_payload)

    client = BatchFlowStockApiClient()
    mock_session_get = mocker.patch.object(client.session, "get", return_value=mock_response)

    result = client.get_current_stock()

    assert result == sample_stock_payload
    mock_response.raise_for_status.assert_called_once()
    mock_session_get.assert_called_once()
    assert mock_session_get.call_args[0][0] == "https://batchflow.test/api/raw/stock"
    assert mock_session_get.call_args[1]["headers"]["Authorization"] == "Bearer test_token"
    assert mock_session_get.call_args[1]["timeout"] == 30.0


def test_no_authorization_header_without_token(mocker) -> None:
    mocker.patch.object(settings, "BATCHFLOW_API_TOKEN", None)

    client = BatchFlowStockApiClient()
    mock_session_get = mocker.patch.object(client.session, "get", return_value=_response([]))

    client.get_current_stock()

    assert "Authorization" not in mock_session_get.call_args[1]["headers"]


def test_trailing_slash_in_base_url_is_ignored() -> None:
    client = BatchFlowStockApiClient(base_url="https://batchflow.test/api/")

    assert client.url == "https://batchflow.test/api/raw/stock"


def test_fetch_stock_records_parses_and_skips_malformed(mocker, sample_stock_payload, caplog) -> None:
    """Malformed elements are counted and logged, the rest are parsed."""
    payload = sample_stock_payload + [{"rawMaterial": {"id": "X", "name": "Yeast"}, "currentQuantity": 4}]

    client = BatchFlowStockApiClient()
    mocker.patch.object(client.session, "get", return_value=_response(payload))

    with caplog.at_level(logging.WARNING):
        batch = client.fetch_stock_records()

    assert isinstance(batch, StockRecordBatchDTO)
    assert len(batch.records) == 3
    assert batch.skipped_count == 1
    assert batch.source == "https://batchflow.test/api/raw/stock"
    assert batch.fetched_at is not None
    assert [record.current_quantity for record in batch.records] == [50, 30, 20]
    assert "Skipped 1 malformed stock record(s)" in caplog.text


def test_get_current_stock_timeout(mocker) -> None:
    """A timeout is raised as an APIError after a single attempt."""
    client = BatchFlowStockApiClient()
    mock_session_get = mocker.patch.object(client.session, "get")
    mock_session_get.side_effect = requests.exceptions.Timeout("Read timed out.")

    with pytest.raises(APIError) as exc_info:
        client.get_current_stock()

    assert mock_session_get.call_count == 1
    assert "timed out" in str(exc_info.value)


def test_get_current_stock_http_error(mocker) -> None:
    mock_response = _response(status_code=503)
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("503 Server Error", response=mock_response)

    client = BatchFlowStockApiClient()
    mocker.patch.object(client.session, "get", return_value=mock_response)

    with pytest.raises(APIError) as exc_info:
        client.get_current_stock()

    assert exc_info.value.status_code == 503


def test_get_current_stock_connection_error(mocker) -> None:
    client = BatchFlowStockApiClient()
    mocker.patch.object(client.session, "get", side_effect=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(APIError) as exc_info:
        client.get_current_stock()

    assert isinstance(exc_info.value.original_exception, requests.exceptions.ConnectionError)


def test_get_current_stock_invalid_json(mocker) -> None:
    mock_response = _response()
    mock_response.json.side_effect = ValueError("Expecting value")

    client = BatchFlowStockApiClient()
    mocker.patch.object(client.session, "get", return_value=mock_response)

    with pytest.raises(APIError) as exc_info:
        client.get_current_stock()

    assert "Failed to decode" in str(exc_info.value)


def test_get_current_stock_rejects_non_array_payload(mocker) -> None:
    client = BatchFlowStockApiClient()
    mocker.patch.object(client.session, "get", return_value=_response({"error": "nope"}))

    with pytest.raises(APIError):
        client.get_current_stock()


def test_missing_base_url_is_a_configuration_error(mocker) -> None:
    """The client refuses to be built without a base URL, before any request is made."""
    mocker.patch.object(settings, "BATCHFLOW_API_BASE_URL", None)
    mock_session_get = mocker.patch("requests.Session.get")

    with pytest.raises(ConfigurationError):
        BatchFlowStockApiClient()

    mock_session_get.assert_not_called()


def test_timeout_setting_is_parsed(mocker) -> None:
    mocker.patch.object(settings, "BATCHFLOW_API_TIMEOUT", "12.5")

    assert BatchFlowStockApiClient().timeout == 12.5


@pytest.mark.parametrize("value", ["soon", "", "0", "-3", "nan"])
def test_invalid_timeout_setting_is_a_configuration_error(mocker, value) -> None:
    mocker.patch.object(settings, "BATCHFLOW_API_TIMEOUT", value)

    with pytest.raises(ConfigurationError, match="BATCHFLOW_API_TIMEOUT"):
        BatchFlowStockApiClient()
