"""Stok sağlığı sınıflandırması ve ölü stok tespiti.

- Stok kapsamına göre Overstock / Stockout Risk / Healthy sınıflandırması
- Eşik gün sayısından uzun süredir satılmayan stokların tespiti
- Ürün bazında StockHealth değerlendirmesi (kapsam + yaşlandırma skoru)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from stock_insight.analyzers.base_analyzer import BaseAnalyzer
from stock_insight.analyzers.metrics import (
    calculate_aging_score,
    calculate_demand_velocity,
    calculate_inventory_cover,
    is_unbounded_cover,
    last_sale_date,
    resolve_now,
)
from stock_insight.clock import EPOCH, days_between
from stock_insight.models.inventory import Product, Sale, StockHealth, StockHealthStatus

logger = logging.getLogger(__name__)


def analyze_stock_health(
    cover_days: float,
    optimal_cover: float = 30,
    safety_stock_days: float = 7,
) -> StockHealthStatus:
    """Kapsam gününe göre stok durumunu sınıflandırır.

    Overstock kontrolü önce yapılır; iki dal varsayılan eşiklerde çakışmaz.
    """
    if cover_days > 2 * optimal_cover:
        return StockHealthStatus.OVERSTOCK
    if cover_days < safety_stock_days:
        return StockHealthStatus.STOCKOUT_RISK
    return StockHealthStatus.HEALTHY


def detect_dead_stock(
    product: Product,
    sales: Sequence[Sale],
    threshold_days: int = 90,
    now: Optional[datetime] = None,
) -> bool:
    """Stokta olup `threshold_days` günden uzun süredir satılmayan ürünleri işaretler.

    Hiç satılmamış ürünlerde son satış tarihi epoch kabul edilir. Stoku sıfır
    olan ürün hiçbir zaman ölü stok sayılmaz.
    """
    if product.total_stock <= 0:
        return False

    ref = resolve_now(now)
    last_sale = last_sale_date(product.product_id, sales) or EPOCH
    return days_between(last_sale, ref) > threshold_days


class StockHealthAnalyzer(BaseAnalyzer):
    """Ürün bazında stok sağlığı değerlendiren analizör."""

    def __init__(self, **kwargs: Any):
        super().__init__(analyzer_name="StockHealthAnalyzer", **kwargs)

    def assess(self, product: Product, sales: Sequence[Sale]) -> StockHealth:
        """Tek bir ürün için StockHealth üretir."""
        cfg = self.config
        now = self.clock.now()

        velocity = calculate_demand_velocity(
            product.product_id, sales, cfg.velocity_window_days, now=now
        )
        cover = calculate_inventory_cover(
            product.total_stock, velocity, cfg.unbounded_cover_days
        )
        aging = calculate_aging_score(
            last_sale_date(product.product_id, sales), cover, now=now
        )

        if detect_dead_stock(product, sales, cfg.dead_stock_threshold_days, now=now):
            status = StockHealthStatus.DEAD_STOCK
        else:
            status = analyze_stock_health(
                cover, cfg.optimal_cover_days, cfg.safety_stock_days
            )

        return StockHealth(
            product_id=product.product_id,
            status=status,
            cover_days=cover,
            aging_score=aging,
            unbounded_cover=is_unbounded_cover(product.total_stock, velocity),
        )

    def process(self, products: Sequence[Product], sales: Sequence[Sale]) -> list[StockHealth]:
        """Ana işlem: tüm ürünler için stok sağlığı."""
        results = [self.assess(p, sales) for p in products]

        summary: dict[str, int] = {}
        for r in results:
            summary[r.status.value] = summary.get(r.status.value, 0) + 1

        self.log_decision(
            decision_type="stock_health_assessment",
            input_data={"products": len(products), "sales": len(sales)},
            output_data={"status_counts": summary},
            reasoning=f"{len(results)} ürün için stok sağlığı değerlendirildi.",
        )
        return results
