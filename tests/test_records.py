import io
import logging

import pytest

from phresh.errors import CartContractError, PhreshError, RecordFormatError, RecordValidationError
from phresh.records import (
    extract_records,
    load_cart,
    load_json,
    load_products,
    load_shipping_settings,
    validate_cart_line,
)


@pytest.mark.parametrize(
    "payload, expected",
    [
        ([{"price": 1}], [{"price": 1}]),
        ({"data": [{"price": 2}]}, [{"price": 2}]),
        ({"data": {"data": [{"price": 3}]}}, [{"price": 3}]),
        ({"data": {"price": 4}}, [{"price": 4}]),
        ({"price": 5}, [{"price": 5}]),
    ],
)
def test_extract_records_unwraps_envelopes(payload, expected):
    assert extract_records(payload) == expected


@pytest.mark.parametrize("payload", ["text", 3, None, {"data": None}])
def test_extract_records_rejects_scalars(payload):
    with pytest.raises(RecordValidationError):
        extract_records(payload)


def test_load_json_reports_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RecordFormatError) as excinfo:
        load_json(str(path))

    assert excinfo.value.error_code == "RECORD_FORMAT"
    assert excinfo.value.category == "RECORD"
    assert str(path) in excinfo.value.explanation


def test_load_json_reports_missing_file(tmp_path):
    with pytest.raises(RecordFormatError):
        load_json(str(tmp_path / "missing.json"))


def test_load_json_reads_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO('[{"price": 9}]'))

    assert load_json("-") == [{"price": 9}]


def test_load_products_skips_non_objects(write_json, caplog):
    path = write_json("products.json", {"data": [{"name": "Orange", "price": 300}, "oops", 7]})

    with caplog.at_level(logging.WARNING, logger="phresh.records"):
        products = load_products(path)

    assert products == [{"name": "Orange", "price": 300}]
    assert len([r for r in caplog.records if "Skipping product record" in r.getMessage()]) == 2


@pytest.mark.parametrize(
    "line, message",
    [
        ("not a line", "must be a JSON object"),
        ({"_id": "a", "quantity": 1}, "missing required object field 'product'"),
        ({"_id": "a", "product": {}, "quantity": "2"}, "expected int, got str"),
        ({"_id": "a", "product": {}, "quantity": True}, "expected int, got bool"),
        ({"_id": "a", "product": {}, "quantity": 0}, "must be positive"),
    ],
)
def test_validate_cart_line_rejects_bad_lines(line, message):
    with pytest.raises(CartContractError) as excinfo:
        validate_cart_line(line)

    assert message in excinfo.value.explanation
    assert excinfo.value.error_code == "CART_CONTRACT"
    assert isinstance(excinfo.value, PhreshError)


def test_load_cart_accepts_items_envelope(write_json):
    line = {"_id": "l1", "quantity": 2, "product": {"price": 100}}
    path = write_json("cart.json", {"items": [line]})

    assert load_cart(path) == [line]


def test_load_shipping_settings(write_json):
    path = write_json("shipping.json", {"data": {"delivery_charges": 250, "free_delivery_threshold": 5000}})

    assert load_shipping_settings(path) == {"delivery_charges": 250, "free_delivery_threshold": 5000}


def test_load_shipping_settings_rejects_lists(write_json):
    with pytest.raises(RecordValidationError):
        load_shipping_settings(write_json("shipping.json", [1, 2]))
