"""Sales Forecaster - 30/60 günlük büyüme ve satış tahmini.

- Ürün satışlarını güncel (son 30 gün) ve önceki (30-60 gün) pencerelere ayırır
- Grafik için son 60 günün günlük satış geçmişini çıkarır
- Büyüme oranına göre trend sınıflandırması yapar
- Trend bazlı momentum çarpanı ile sonraki 30 günü tahmin eder
"""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Any, Sequence

from stock_insight.analyzers.base_analyzer import BaseAnalyzer
from stock_insight.models.inventory import (
    ForecastTrend,
    HistoryPoint,
    Product,
    ProductForecast,
    Sale,
)

logger = logging.getLogger(__name__)


class SalesForecaster(BaseAnalyzer):
    """Ürün bazında büyüme trendi ve satış tahmini üreten analizör."""

    def __init__(self, **kwargs: Any):
        super().__init__(analyzer_name="SalesForecaster", **kwargs)

    def calculate_growth_rate(self, current_qty: int, previous_qty: int) -> float:
        """Önceki dönem yoksa ve güncel satış varsa sabit %100 ("yeni/patlama")."""
        if previous_qty > 0:
            return (current_qty - previous_qty) / previous_qty * 100
        if current_qty > 0:
            return self.config.new_product_growth_rate
        return 0.0

    def classify_trend(
        self, current_qty: int, previous_qty: int, growth_rate: float
    ) -> ForecastTrend:
        # New, büyüme eşiklerinden önce gelir
        if previous_qty == 0 and current_qty > 0:
            return ForecastTrend.NEW
        if growth_rate >= self.config.high_growth_threshold:
            return ForecastTrend.HIGH_GROWTH
        if growth_rate <= self.config.declining_threshold:
            return ForecastTrend.DECLINING
        return ForecastTrend.STABLE

    def momentum_factor(self, trend: ForecastTrend) -> float:
        cfg = self.config
        if trend == ForecastTrend.HIGH_GROWTH:
            return cfg.high_growth_momentum
        if trend == ForecastTrend.DECLINING:
            return cfg.declining_momentum
        return cfg.stable_momentum

    def forecast_product(self, product: Product, sales: Sequence[Sale]) -> ProductForecast:
        """Tek bir ürün için tahmin üretir."""
        window = timedelta(days=self.config.forecast_window_days)
        now = self.clock.now()
        current_start = now - window
        previous_start = now - 2 * window

        current_qty = 0
        previous_qty = 0
        daily: dict[str, int] = {}

        for s in sales:
            qty = s.quantity_of(product.product_id)
            if qty <= 0:
                continue

            if s.date >= previous_start:
                day = s.date.date().isoformat()
                daily[day] = daily.get(day, 0) + qty

            if s.date >= current_start:
                current_qty += qty
            elif s.date >= previous_start:
                previous_qty += qty

        growth_rate = self.calculate_growth_rate(current_qty, previous_qty)
        trend = self.classify_trend(current_qty, previous_qty, growth_rate)
        forecasted = math.ceil(current_qty * self.momentum_factor(trend))

        return ProductForecast(
            product_id=product.product_id,
            name=product.name,
            current_monthly_sales=current_qty,
            previous_monthly_sales=previous_qty,
            growth_rate=growth_rate,
            trend=trend,
            forecasted_sales=forecasted,
            # İstatistiksel doğrulaması olmayan sabit güven değeri
            confidence=self.config.forecast_confidence,
            history=[HistoryPoint(d, v) for d, v in sorted(daily.items())],
        )

    def generate(self, products: Sequence[Product], sales: Sequence[Sale]) -> list[ProductForecast]:
        """Tüm ürünler için tahmin üretir, tahmini hacme göre azalan sıralar."""
        forecasts = [self.forecast_product(p, sales) for p in products]
        forecasts.sort(key=lambda f: f.forecasted_sales, reverse=True)

        trend_counts: dict[str, int] = {}
        for f in forecasts:
            trend_counts[f.trend.value] = trend_counts.get(f.trend.value, 0) + 1

        self.log_decision(
            decision_type="product_forecasts",
            input_data={"products": len(products), "sales": len(sales)},
            output_data={
                "trend_counts": trend_counts,
                "top": forecasts[0].product_id if forecasts else None,
            },
            reasoning=f"{len(forecasts)} ürün için 30 günlük satış tahmini yapıldı.",
        )
        return forecasts

    def process(self, products: Sequence[Product], sales: Sequence[Sale]) -> list[ProductForecast]:
        """Ana işlem: ürün tahminleri."""
        return self.generate(products, sales)
