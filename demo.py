"""
Stok Analitiği Motoru Demo Script'i.

Demo snapshot'ı üretir (yoksa), stok sağlığı, stratejik öneriler ve satış
tahminlerini konsola yazdırır.

Kullanım:
    python demo.py                      # data_layer/data altındaki snapshot
    STOCK_INSIGHT_S3_BUCKET=... python demo.py   # S3 snapshot
"""

import json
import logging
import os
import sys

from dotenv import load_dotenv

from data_layer.generators.sample_data import generate_all
from data_layer.providers import provider_from_env
from data_layer.records import SnapshotError
from stock_insight import (
    InsightGenerator,
    SalesForecaster,
    StockHealthAnalyzer,
    load_config,
)

load_dotenv(override=False)


def ensure_sample_snapshot():
    """Yerel snapshot yoksa demo verisini üretir."""
    if os.environ.get("STOCK_INSIGHT_S3_BUCKET"):
        return
    directory = os.environ.get("STOCK_INSIGHT_SNAPSHOT_DIR", "data_layer/data")
    if not os.path.exists(os.path.join(directory, "products.json")):
        generate_all(output_dir=directory)
        print()


def show_stock_health(products, sales, config):
    print("\n--- Stok Sağlığı ---")
    for health in StockHealthAnalyzer(config=config).process(products, sales):
        cover = "∞" if health.unbounded_cover else f"{health.cover_days:.1f}"
        print(f"   {health.product_id}: {health.status.value:<14} kapsam={cover:>6} gün, yaşlanma={health.aging_score:.2f}")


def show_insights(products, sales, config):
    print("\n--- Stratejik Öneriler ---")
    insights = InsightGenerator(config=config).generate(products, sales)
    if not insights:
        print("   Öneri yok")
    for i in insights:
        print(f"   [{i.type.value}] {i.problem}")
        print(f"      {i.recommended_action} | {i.impact} | {i.roi_impact} (güven: {i.confidence_score})")


def show_forecasts(products, sales, config):
    print("\n--- 30 Günlük Satış Tahminleri ---")
    for f in SalesForecaster(config=config).generate(products, sales):
        print(
            f"   {f.product_id} {f.name:<22} güncel={f.current_monthly_sales:>4} "
            f"önceki={f.previous_monthly_sales:>4} büyüme={f.growth_rate:>7.1f}% "
            f"{f.trend.value:<11} tahmin={f.forecasted_sales}"
        )


def main():
    logging.basicConfig(
        level=os.environ.get("STOCK_INSIGHT_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ensure_sample_snapshot()
    config = load_config()
    try:
        products, sales = provider_from_env().load()
    except SnapshotError as e:
        print(f"❌ Snapshot okunamadı: {e}")
        sys.exit(1)
    print(f"✅ Snapshot yüklendi: {len(products)} ürün, {len(sales)} satış")

    show_stock_health(products, sales, config)
    show_insights(products, sales, config)
    show_forecasts(products, sales, config)

    if "--json" in sys.argv:
        insights = InsightGenerator(config=config).generate(products, sales)
        print(json.dumps([i.to_dict() for i in insights], ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
