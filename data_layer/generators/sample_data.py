"""Demo snapshot üretim modülü.

4 lokasyon, 12 ürün, 90 günlük satış geçmişi üretir.

Problemli senaryolar:
- Bir lokasyonda yığılmış, diğerinde tükenmek üzere olan stok (transfer)
- Uzun süredir satılmayan yüksek maliyetli stok (ölü stok)
- Hızlı satan, stoğu azalmış ürün (yeniden sipariş)
- Son 30 günde satışa başlayan yeni ürün
"""

from __future__ import annotations

import json
import math
import os
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from stock_insight.locations import DEFAULT_LOCATIONS

LOCATION_IDS = [loc.location_id for loc in DEFAULT_LOCATIONS]

# (id, ad, maliyet, fiyat, günlük ortalama satış)
CATALOG: list[tuple[str, str, float, float, float]] = [
    ("P001", "Basmati Rice 5kg", 420.0, 560.0, 3.0),
    ("P002", "Sunflower Oil 1L", 130.0, 165.0, 5.0),
    ("P003", "Masala Chai 250g", 95.0, 140.0, 2.0),
    ("P004", "Steel Water Bottle", 210.0, 349.0, 0.8),
    ("P005", "Cotton Bedsheet", 480.0, 799.0, 0.4),
    ("P006", "LED Desk Lamp", 650.0, 999.0, 0.3),
    ("P007", "Ceramic Dinner Set", 1800.0, 2600.0, 0.0),
    ("P008", "Wireless Earbuds", 900.0, 1499.0, 1.5),
    ("P009", "Notebook A5 (pack)", 60.0, 95.0, 4.0),
    ("P010", "Pressure Cooker 3L", 1100.0, 1650.0, 0.5),
    ("P011", "Smart Plug", 550.0, 899.0, 0.0),
    ("P012", "Herbal Shampoo", 140.0, 220.0, 1.2),
]

DEAD_STOCK_SKUS = {"P007"}
NEW_SKUS = {"P011"}
IMBALANCED_SKUS = {"P008": ("warehouse-a", "store-downtown")}
LOW_STOCK_SKUS = {"P002"}


def generate_products(rng: random.Random) -> list[dict]:
    products = []
    for sku, name, cost, price, daily in CATALOG:
        stock = {loc: rng.randint(20, 80) for loc in LOCATION_IDS}

        if sku in IMBALANCED_SKUS:
            source, target = IMBALANCED_SKUS[sku]
            stock = {loc: 0 for loc in LOCATION_IDS}
            stock[source] = 400
            stock[target] = 3
        elif sku in LOW_STOCK_SKUS:
            stock = {loc: rng.randint(2, 8) for loc in LOCATION_IDS}
        elif sku in DEAD_STOCK_SKUS:
            stock = {loc: 15 for loc in LOCATION_IDS}
        elif sku in NEW_SKUS:
            stock = {loc: 25 for loc in LOCATION_IDS}

        products.append(
            {"id": sku, "name": name, "cost": cost, "price": price, "stock": stock}
        )
    return products


def _location_weights(sku: str) -> list[float]:
    if sku in IMBALANCED_SKUS:
        _, target = IMBALANCED_SKUS[sku]
        return [1.0 if loc == target else 0.0 for loc in LOCATION_IDS]
    return [1.0] * len(LOCATION_IDS)


def generate_sales(
    rng: random.Random, days: int = 90, now: Optional[datetime] = None
) -> list[dict]:
    """Günlük satış kayıtları (her gün, her lokasyon için bir fiş)."""
    now = now or datetime.now(timezone.utc)
    sales = []
    counter = 0

    for day_offset in range(days, 0, -1):
        day = (now - timedelta(days=day_offset)).replace(hour=12, minute=0, second=0, microsecond=0)

        for loc_index, loc in enumerate(LOCATION_IDS):
            items = []
            for sku, _, _, _, daily in CATALOG:
                rate = daily
                if sku in NEW_SKUS:
                    rate = 1.0 if day_offset <= 25 else 0.0
                weight = _location_weights(sku)[loc_index]
                # Dağılım lokasyonlar arasında paylaştırılır
                share = rate * weight / max(sum(_location_weights(sku)), 1.0)
                qty = _poisson(rng, share)
                if qty > 0:
                    items.append({"id": sku, "quantity": qty})

            if items:
                counter += 1
                sales.append(
                    {
                        "id": f"S{counter:06d}",
                        "date": day.isoformat(),
                        "locationId": loc,
                        "items": items,
                    }
                )
    return sales


def _poisson(rng: random.Random, lam: float) -> int:
    if lam <= 0:
        return 0
    # Knuth algoritması, küçük lambda için yeterli
    threshold = math.exp(-lam)
    k, p = 0, 1.0
    while True:
        p *= rng.random()
        if p <= threshold:
            return k
        k += 1


def save_json(data: list[dict], filepath: str) -> None:
    """JSON dosyasına kaydet."""
    os.makedirs(os.path.dirname(filepath), exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    print(f"  ✓ {filepath} ({len(data)} kayıt)")


def generate_all(output_dir: str = "data_layer/data", seed: int = 42, days: int = 90) -> dict:
    """Tüm demo verisini üretir ve kaydeder."""
    rng = random.Random(seed)
    print("🏭 Demo snapshot üretiliyor...\n")

    products = generate_products(rng)
    save_json(products, os.path.join(output_dir, "products.json"))

    sales = generate_sales(rng, days=days)
    save_json(sales, os.path.join(output_dir, "sales.json"))

    print(f"\n✅ Üretim tamamlandı: {len(products)} ürün, {len(sales):,} satış, çıktı: {output_dir}/")
    return {"products": products, "sales": sales}


if __name__ == "__main__":
    generate_all()
