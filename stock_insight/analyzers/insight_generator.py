"""Strategic Insight Generator - Önceliklendirilmiş stok önerileri.

Sıra: transfer fırsatları -> ölü stok tasfiyesi -> yeniden sipariş riski.
Sonuçlar kategori önceliğine göre (Risk > Kâr > Nakit > Büyüme) kararlı
şekilde sıralanır ve ilk N öneri döndürülür. Parasal etki sıralamaya
katılmaz.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

from stock_insight.analyzers.base_analyzer import BaseAnalyzer
from stock_insight.analyzers.metrics import calculate_demand_velocity, calculate_inventory_cover
from stock_insight.analyzers.stock_health import detect_dead_stock
from stock_insight.analyzers.transfer_optimizer import TransferOptimizer
from stock_insight.formatting import format_currency
from stock_insight.models.inventory import (
    ActionType,
    InsightType,
    Product,
    Sale,
    StrategicInsight,
)

logger = logging.getLogger(__name__)


def rank_insights(insights: Sequence[StrategicInsight], limit: int = 5) -> list[StrategicInsight]:
    """Kategori önceliğine göre azalan, kararlı sıralama ve kesme."""
    ranked = sorted(insights, key=lambda i: i.type.priority, reverse=True)
    return ranked[:limit]


class InsightGenerator(BaseAnalyzer):
    """Transfer, tasfiye ve sipariş önerilerini birleştiren analizör."""

    def __init__(self, transfer_optimizer: Optional[TransferOptimizer] = None, **kwargs: Any):
        super().__init__(analyzer_name="InsightGenerator", **kwargs)
        self.transfer_optimizer = transfer_optimizer or TransferOptimizer(
            config=self.config,
            clock=self.clock,
            location_registry=self.location_registry,
        )

    # --- Ölü stok tasfiyesi ---

    def find_dead_stock(
        self, products: Sequence[Product], sales: Sequence[Sale]
    ) -> list[StrategicInsight]:
        cfg = self.config
        now = self.clock.now()
        insights: list[StrategicInsight] = []

        for p in products:
            if not detect_dead_stock(p, sales, cfg.dead_stock_threshold_days, now=now):
                continue

            stock = p.total_stock
            capital_blocked = stock * (p.cost or 0.0)
            # Yalnızca anlamlı tutarları işaretle
            if capital_blocked <= cfg.dead_stock_min_capital:
                continue

            recoverable = capital_blocked * cfg.liquidation_recovery_rate
            insights.append(
                StrategicInsight(
                    insight_id=f"deadstock-{p.product_id}",
                    type=InsightType.CASH_FLOW,
                    problem=f"Dead Stock: {p.name}",
                    impact=f"{format_currency(capital_blocked, cfg.currency_symbol)} capital blocked",
                    recommended_action=f"Liquidate {stock} units. Run clearance sale.",
                    roi_impact=f"Recover ~{format_currency(recoverable, cfg.currency_symbol)}",
                    confidence_score=cfg.confidence_for(ActionType.LIQUIDATE.value),
                    action_type=ActionType.LIQUIDATE,
                    metadata={
                        "productId": p.product_id,
                        "currentStock": stock,
                        "capitalBlocked": capital_blocked,
                        "recoverableValue": recoverable,
                    },
                )
            )
        return insights

    # --- Stok tükenme riski ---

    def find_reorder_risks(
        self, products: Sequence[Product], sales: Sequence[Sale]
    ) -> list[StrategicInsight]:
        cfg = self.config
        now = self.clock.now()
        insights: list[StrategicInsight] = []

        for p in products:
            velocity = calculate_demand_velocity(
                p.product_id, sales, cfg.velocity_window_days, now=now
            )
            cover = calculate_inventory_cover(p.total_stock, velocity, cfg.unbounded_cover_days)

            if not (cover < cfg.reorder_cover_days and velocity > cfg.reorder_min_velocity):
                continue

            reorder_qty = math.ceil(velocity * cfg.reorder_horizon_days)
            profit_at_risk = velocity * cfg.reorder_cover_days * p.margin
            if profit_at_risk < 0:
                logger.warning(
                    "Negatif marj: %s (fiyat=%s, maliyet=%s), korunan kâr negatif görünecek",
                    p.product_id, p.price, p.cost,
                )

            insights.append(
                StrategicInsight(
                    insight_id=f"reorder-{p.product_id}",
                    type=InsightType.RISK_MITIGATION,
                    problem=f"Stockout Risk: {p.name}",
                    impact=f"Only {math.floor(cover)} days of stock left",
                    recommended_action=f"Place urgent reorder for {reorder_qty} units",
                    roi_impact=f"Protect ~{format_currency(profit_at_risk, cfg.currency_symbol)} profit",
                    confidence_score=cfg.confidence_for(ActionType.REORDER.value),
                    action_type=ActionType.REORDER,
                    metadata={
                        "productId": p.product_id,
                        "reorderQty": reorder_qty,
                        "coverDays": cover,
                        "velocity": velocity,
                        "profitAtRisk": profit_at_risk,
                    },
                )
            )
        return insights

    def generate(self, products: Sequence[Product], sales: Sequence[Sale]) -> list[StrategicInsight]:
        """Tüm önerileri üretir, önceliğe göre sıralar ve ilk N tanesini döndürür."""
        insights: list[StrategicInsight] = []
        insights.extend(self.transfer_optimizer.find_transfer_opportunities(products, sales))
        insights.extend(self.find_dead_stock(products, sales))
        insights.extend(self.find_reorder_risks(products, sales))

        top = rank_insights(insights, self.config.max_insights)

        self.log_decision(
            decision_type="strategic_insights",
            input_data={"products": len(products), "sales": len(sales)},
            output_data={
                "candidates": len(insights),
                "returned": [i.insight_id for i in top],
            },
            reasoning=(
                f"{len(insights)} aday öneriden kategori önceliğine göre "
                f"{len(top)} tanesi seçildi."
            ),
        )
        return top

    def process(self, products: Sequence[Product], sales: Sequence[Sale]) -> list[StrategicInsight]:
        """Ana işlem: stratejik önerileri üret."""
        return self.generate(products, sales)
