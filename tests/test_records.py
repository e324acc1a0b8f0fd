"""Ham kayıt dönüşümü unit testleri."""

from datetime import datetime, timezone

import pytest

from data_layer.records import (
    RecordValidationError,
    SnapshotError,
    parse_product,
    parse_sale,
    parse_snapshot,
    product_to_record,
    sale_to_record,
)
from stock_insight.models.inventory import Product


class TestParseProduct:
    def test_full_record(self):
        product = parse_product({
            "id": "P1",
            "name": "Çay",
            "cost": 10,
            "price": "25.5",
            "stock": {"warehouse-a": 40, "store-downtown": "3"},
        })
        assert product == Product(
            "P1", "Çay", cost=10.0, price=25.5,
            stock={"warehouse-a": 40, "store-downtown": 3},
        )

    def test_mongo_style_id_and_missing_optionals(self):
        product = parse_product({"_id": "P2", "name": "Şeker", "price": None})
        assert product.product_id == "P2"
        assert product.cost == 0
        assert product.price == 0
        assert product.stock == {}
        assert product.total_stock == 0

    def test_non_numeric_price_defaults_to_zero(self):
        assert parse_product({"id": "P3", "price": "bilinmiyor"}).price == 0

    def test_missing_id_raises(self):
        with pytest.raises(RecordValidationError):
            parse_product({"name": "Kimliksiz"})

    def test_negative_stock_raises(self):
        with pytest.raises(RecordValidationError):
            parse_product({"id": "P1", "stock": {"A": -2}})

    def test_invalid_stock_raises(self):
        with pytest.raises(RecordValidationError):
            parse_product({"id": "P1", "stock": {"A": "çok"}})
        with pytest.raises(RecordValidationError):
            parse_product({"id": "P1", "stock": [1, 2]})


class TestParseSale:
    def test_full_record(self):
        sale = parse_sale({
            "id": "S1",
            "date": "2025-06-01T10:30:00Z",
            "locationId": "store-downtown",
            "items": [{"id": "P1", "quantity": 2}, {"productId": "P2", "quantity": "1"}],
        })
        assert sale.date == datetime(2025, 6, 1, 10, 30, tzinfo=timezone.utc)
        assert sale.location_id == "store-downtown"
        assert sale.quantity_of("P1") == 2
        assert sale.quantity_of("P2") == 1

    def test_offset_normalized_to_utc(self):
        sale = parse_sale({"id": "S1", "date": "2025-06-01T03:00:00+03:00", "items": []})
        assert sale.date == datetime(2025, 6, 1, 0, 0, tzinfo=timezone.utc)

    def test_naive_date_is_utc(self):
        sale = parse_sale({"id": "S1", "date": "2025-06-01T00:00:00", "location_id": "A"})
        assert sale.date.tzinfo is not None
        assert sale.location_id == "A"

    def test_missing_or_invalid_date_raises(self):
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "items": []})
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "date": "dün", "items": []})

    def test_non_positive_quantity_raises(self):
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "date": "2025-06-01", "items": [{"id": "P1", "quantity": 0}]})

    def test_item_without_product_raises(self):
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "date": "2025-06-01", "items": [{"quantity": 1}]})

    def test_non_string_date_raises(self):
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "date": 20250601, "items": []})

    def test_malformed_items_raise(self):
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "date": "2025-06-01", "items": ["P1"]})
        with pytest.raises(RecordValidationError):
            parse_sale({"id": "S1", "date": "2025-06-01", "items": {"id": "P1", "quantity": 1}})


class TestSnapshot:
    def test_validation_error_is_snapshot_error(self):
        assert issubclass(RecordValidationError, SnapshotError)

    def test_records_survive_serialization(self):
        products, sales = parse_snapshot(
            [{"id": "P1", "name": "Çay", "cost": 1, "price": 2, "stock": {"A": 5}}],
            [{"id": "S1", "date": "2025-06-01T00:00:00Z", "locationId": "A",
              "items": [{"id": "P1", "quantity": 3}]}],
        )
        again = parse_snapshot(
            [product_to_record(p) for p in products],
            [sale_to_record(s) for s in sales],
        )
        assert again == (products, sales)
