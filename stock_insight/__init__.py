"""Stok analitiği motoru: talep metrikleri, stratejik öneriler ve satış tahminleri."""

from __future__ import annotations

from typing import Optional, Sequence

from stock_insight.analyzers import (
    InsightGenerator,
    SalesForecaster,
    StockHealthAnalyzer,
    TransferOptimizer,
)
from stock_insight.clock import Clock, FixedClock, SystemClock
from stock_insight.config import EngineConfig, load_config
from stock_insight.locations import (
    LocationRegistry,
    SnapshotLocationRegistry,
    StaticLocationRegistry,
)
from stock_insight.models.inventory import Product, ProductForecast, Sale, StrategicInsight

__version__ = "0.1.0"


def generate_strategic_insights(
    products: Sequence[Product],
    sales: Sequence[Sale],
    config: Optional[EngineConfig] = None,
    clock: Optional[Clock] = None,
    location_registry: Optional[LocationRegistry] = None,
) -> list[StrategicInsight]:
    """Kategori önceliğine göre sıralanmış en fazla N stratejik öneri."""
    return InsightGenerator(
        config=config, clock=clock, location_registry=location_registry
    ).generate(products, sales)


def generate_product_forecasts(
    products: Sequence[Product],
    sales: Sequence[Sale],
    config: Optional[EngineConfig] = None,
    clock: Optional[Clock] = None,
) -> list[ProductForecast]:
    """Tahmini satış hacmine göre azalan sıralı ürün tahminleri."""
    return SalesForecaster(config=config, clock=clock).generate(products, sales)


__all__ = [
    "Clock",
    "EngineConfig",
    "FixedClock",
    "InsightGenerator",
    "LocationRegistry",
    "SalesForecaster",
    "SnapshotLocationRegistry",
    "StaticLocationRegistry",
    "StockHealthAnalyzer",
    "SystemClock",
    "TransferOptimizer",
    "generate_product_forecasts",
    "generate_strategic_insights",
    "load_config",
]
