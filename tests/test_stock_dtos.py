"""Tests for the stock record adapter."""

import pytest

from src.common.dtos.stock_dtos import StockRecordDTO, resolve_quantity
from src.common.exceptions.custom_exceptions import MalformedRecordError


def _payload(**overrides) -> dict:
    data = {
        "rawMaterial": {"id": "A", "name": "Flour", "unitOfMeasurement": "kg"},
        "warehouse": {"id": "W1", "name": "North", "location": "Hall 1"},
        "currentQuantity": 50,
    }
    data.update(overrides)
    return data


def test_from_api_response_maps_fields() -> None:
    record = StockRecordDTO.from_api_response(_payload())

    assert record.raw_material.id == "A"
    assert record.raw_material.name == "Flour"
    assert record.raw_material.unit_of_measurement == "kg"
    assert record.raw_material.min_reorder_level is None
    assert record.warehouse.location == "Hall 1"
    assert record.current_quantity == 50
    assert record.key == "A_W1"


def test_numeric_ids_become_strings() -> None:
    record = StockRecordDTO.from_api_response(
        _payload(rawMaterial={"id": 7, "name": "Salt"}, warehouse={"id": 3, "name": "East"})
    )

    assert record.key == "7_3"


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"currentQuantity": 12, "quantity": 99}, 12),
        ({"currentQuantity": 0, "quantity": 99}, 0),
        ({"currentQuantity": None, "quantity": 7}, 7),
        ({"quantity": 7.5}, 7.5),
        ({}, 0),
        ({"currentQuantity": "12.5"}, 12.5),
    ],
)
def test_resolve_quantity(data, expected) -> None:
    assert resolve_quantity(data) == expected


@pytest.mark.parametrize(
    "data",
    [
        {"currentQuantity": -1},
        {"currentQuantity": "lots"},
        {"currentQuantity": True},
        {"quantity": float("nan")},
        {"currentQuantity": [1]},
    ],
)
def test_resolve_quantity_rejects_bad_values(data) -> None:
    with pytest.raises(MalformedRecordError):
        resolve_quantity(data)


@pytest.mark.parametrize(
    "data",
    [
        {"warehouse": {"id": "W1", "name": "North"}, "currentQuantity": 1},
        {"rawMaterial": {"id": "A", "name": "Flour"}, "currentQuantity": 1},
        _payload(rawMaterial=None),
        _payload(warehouse={"id": "W1"}),
        _payload(rawMaterial={"name": "Flour"}),
        "not a record",
        None,
    ],
)
def test_malformed_records_are_rejected(data) -> None:
    with pytest.raises(MalformedRecordError):
        StockRecordDTO.from_api_response(data)


def test_reorder_level_is_carried_and_bad_values_are_dropped() -> None:
    good = StockRecordDTO.from_api_response(_payload(rawMaterial={"id": "A", "name": "Flour", "minReorderLevel": 100}))
    bad = StockRecordDTO.from_api_response(_payload(rawMaterial={"id": "A", "name": "Flour", "minReorderLevel": "n/a"}))

    assert good.raw_material.min_reorder_level == 100
    assert bad.raw_material.min_reorder_level is None
