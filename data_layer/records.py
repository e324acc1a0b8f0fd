"""Ham kayıtlardan (JSON/dict) model nesnelerine dönüşüm.

Kabul edilen biçimler:
  Ürün:  {"id" | "_id", "name", "cost", "price", "stock": {location_id: qty}}
  Satış: {"id" | "_id", "date" (ISO 8601), "locationId", "items": [{"id", "quantity"}]}

Opsiyonel sayısal alanlar (cost, price) eksik ya da null ise 0 kabul edilir.
Yapısal olarak bozuk kayıtlar RecordValidationError fırlatır.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from stock_insight.clock import parse_timestamp
from stock_insight.models.inventory import Product, Sale, SaleItem

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Snapshot okuma/dönüştürme hatası."""
    pass


class RecordValidationError(SnapshotError):
    """Bozuk ürün veya satış kaydı."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """Snapshot kaynağı bulunamadı."""
    pass


def _record_id(record: Mapping[str, Any], kind: str) -> str:
    value = record.get("id", record.get("_id"))
    if value is None or str(value) == "":
        raise RecordValidationError(f"{kind} kaydında id eksik: {dict(record)!r}")
    return str(value)


def _number(record: Mapping[str, Any], key: str) -> float:
    value = record.get(key)
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Sayısal olmayan %s değeri 0 kabul edildi: %r", key, value)
        return 0.0


def parse_product(record: Mapping[str, Any]) -> Product:
    product_id = _record_id(record, "Ürün")

    raw_stock = record.get("stock") or {}
    if not isinstance(raw_stock, Mapping):
        raise RecordValidationError(f"Ürün {product_id}: stock bir sözlük olmalıdır")

    stock: dict[str, int] = {}
    for loc_id, qty in raw_stock.items():
        try:
            qty_int = int(qty or 0)
        except (TypeError, ValueError) as e:
            raise RecordValidationError(
                f"Ürün {product_id}: geçersiz stok miktarı {loc_id}={qty!r}"
            ) from e
        if qty_int < 0:
            raise RecordValidationError(
                f"Ürün {product_id}: negatif stok {loc_id}={qty_int}"
            )
        stock[str(loc_id)] = qty_int

    return Product(
        product_id=product_id,
        name=str(record.get("name") or product_id),
        cost=_number(record, "cost"),
        price=_number(record, "price"),
        stock=stock,
    )


def parse_sale(record: Mapping[str, Any]) -> Sale:
    sale_id = _record_id(record, "Satış")

    raw_date = record.get("date")
    if not raw_date:
        raise RecordValidationError(f"Satış {sale_id}: tarih eksik")
    try:
        date = parse_timestamp(raw_date)
    except (TypeError, ValueError) as e:
        raise RecordValidationError(f"Satış {sale_id}: geçersiz tarih {raw_date!r}") from e

    raw_items = record.get("items") or []
    if not isinstance(raw_items, list):
        raise RecordValidationError(f"Satış {sale_id}: items bir liste olmalıdır")

    items = []
    for raw_item in raw_items:
        if not isinstance(raw_item, Mapping):
            raise RecordValidationError(f"Satış {sale_id}: geçersiz kalem {raw_item!r}")
        product_id = raw_item.get("id", raw_item.get("productId"))
        if product_id is None:
            raise RecordValidationError(f"Satış {sale_id}: ürün kimliği olmayan kalem")
        try:
            quantity = int(raw_item.get("quantity", 0))
        except (TypeError, ValueError) as e:
            raise RecordValidationError(
                f"Satış {sale_id}: geçersiz miktar {raw_item.get('quantity')!r}"
            ) from e
        if quantity <= 0:
            raise RecordValidationError(
                f"Satış {sale_id}: miktar pozitif olmalıdır ({product_id}={quantity})"
            )
        items.append(SaleItem(str(product_id), quantity))

    return Sale(
        sale_id=sale_id,
        date=date,
        location_id=str(record.get("locationId") or record.get("location_id") or ""),
        items=tuple(items),
    )


def parse_snapshot(
    product_records: Iterable[Mapping[str, Any]],
    sale_records: Iterable[Mapping[str, Any]],
) -> tuple[list[Product], list[Sale]]:
    products = [parse_product(r) for r in product_records]
    sales = [parse_sale(r) for r in sale_records]
    logger.info("Snapshot yüklendi: %d ürün, %d satış", len(products), len(sales))
    return products, sales


def product_to_record(product: Product) -> dict:
    return {
        "id": product.product_id,
        "name": product.name,
        "cost": product.cost,
        "price": product.price,
        "stock": dict(product.stock),
    }


def sale_to_record(sale: Sale) -> dict:
    return {
        "id": sale.sale_id,
        "date": sale.date.isoformat(),
        "locationId": sale.location_id,
        "items": [{"id": i.product_id, "quantity": i.quantity} for i in sale.items],
    }
