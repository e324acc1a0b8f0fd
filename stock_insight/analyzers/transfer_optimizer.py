"""Transfer Optimizer - Lokasyonlar arası stok dengeleme önerileri.

- Her ürün için lokasyon bazında stok, talep hızı ve kapsam hesaplar
- Fazla stoklu kaynakları ve tükenmek üzere olan hedefleri eşleştirir
- Transfer miktarını kaynak fazlası ve hedef kapsam ihtiyacı ile sınırlar
- Yalnızca kazancı lojistik maliyetini aşan transferleri önerir
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

from stock_insight.analyzers.base_analyzer import BaseAnalyzer
from stock_insight.analyzers.metrics import (
    calculate_demand_velocity,
    calculate_inventory_cover,
    is_unbounded_cover,
    sales_at_location,
)
from stock_insight.formatting import format_whole_currency
from stock_insight.models.inventory import (
    ActionType,
    InsightType,
    LocationStats,
    Product,
    Sale,
    StrategicInsight,
)

logger = logging.getLogger(__name__)


class TransferOptimizer(BaseAnalyzer):
    """Lokasyonlar arası transfer fırsatlarını bulan analizör."""

    def __init__(self, **kwargs: Any):
        super().__init__(analyzer_name="TransferOptimizer", **kwargs)

    def location_stats(
        self,
        product: Product,
        sales: Sequence[Sale],
        sales_by_location: Optional[dict[str, list[Sale]]] = None,
    ) -> list[LocationStats]:
        """Registry'deki her lokasyon için stok/hız/kapsam döndürür."""
        cfg = self.config
        now = self.clock.now()

        stats = []
        for loc_id in self.location_registry.location_ids():
            local_sales = (
                sales_by_location[loc_id]
                if sales_by_location is not None and loc_id in sales_by_location
                else sales_at_location(sales, loc_id)
            )
            stock = product.stock_at(loc_id)
            velocity = calculate_demand_velocity(
                product.product_id, local_sales, cfg.velocity_window_days, now=now
            )
            cover = calculate_inventory_cover(stock, velocity, cfg.unbounded_cover_days)
            stats.append(
                LocationStats(loc_id, stock, velocity, cover, is_unbounded_cover(stock, velocity))
            )
        return stats

    def calculate_transfer_quantity(self, source: LocationStats, target: LocationStats) -> int:
        """Kaynak fazlasının yarısı ve hedefi hedef kapsama taşıyacak miktarın küçüğü."""
        cfg = self.config
        needed = (cfg.target_cover_days - target.cover) * target.velocity
        return math.floor(min(source.stock * cfg.max_transfer_share, needed))

    def transfer_cost(self, quantity: int) -> float:
        # Sabit + adet başı lojistik maliyeti
        return self.config.transfer_base_cost + quantity * self.config.transfer_unit_cost

    def find_for_product(
        self,
        product: Product,
        sales: Sequence[Sale],
        sales_by_location: Optional[dict[str, list[Sale]]] = None,
    ) -> list[StrategicInsight]:
        cfg = self.config
        stats = self.location_stats(product, sales, sales_by_location)

        overstocked = [l for l in stats if l.cover > cfg.overstock_cover_days]
        starving = [
            l
            for l in stats
            if l.cover < cfg.starving_cover_days and l.velocity > cfg.min_target_velocity
        ]

        insights: list[StrategicInsight] = []
        for source in overstocked:
            if source.stock <= cfg.min_source_stock:
                continue
            for target in starving:
                qty = self.calculate_transfer_quantity(source, target)
                if qty <= 0:
                    continue

                estimated_gain = product.margin * qty
                cost = self.transfer_cost(qty)
                if estimated_gain <= cost:
                    logger.debug(
                        "Transfer kârsız, atlandı: %s %s->%s kazanç=%.2f maliyet=%.2f",
                        product.product_id, source.location_id, target.location_id,
                        estimated_gain, cost,
                    )
                    continue

                insights.append(
                    StrategicInsight(
                        insight_id=f"transfer-{product.product_id}-{source.location_id}-{target.location_id}",
                        type=InsightType.PROFIT_OPTIMIZATION,
                        problem=f"Stock imbalance for {product.name}",
                        impact=f"Potential missed sales in {target.location_id}",
                        recommended_action=(
                            f"Transfer {qty} units from {source.location_id} to {target.location_id}"
                        ),
                        roi_impact="+" + format_whole_currency(
                            estimated_gain - cost, cfg.currency_symbol
                        ),
                        confidence_score=cfg.confidence_for(ActionType.TRANSFER.value),
                        action_type=ActionType.TRANSFER,
                        metadata={
                            "productId": product.product_id,
                            "from": source.location_id,
                            "to": target.location_id,
                            "qty": qty,
                            "estimatedGain": estimated_gain,
                            "transferCost": cost,
                            "netGain": estimated_gain - cost,
                        },
                    )
                )
        return insights

    def find_transfer_opportunities(
        self, products: Sequence[Product], sales: Sequence[Sale]
    ) -> list[StrategicInsight]:
        """Tüm ürünler için kârlı transfer önerilerini döndürür."""
        # Satışları lokasyona göre bir kez indeksle
        sales_by_location: dict[str, list[Sale]] = {}
        for s in sales:
            sales_by_location.setdefault(s.location_id, []).append(s)
        for loc_id in self.location_registry.location_ids():
            sales_by_location.setdefault(loc_id, [])

        insights: list[StrategicInsight] = []
        for product in products:
            insights.extend(self.find_for_product(product, sales, sales_by_location))

        if insights:
            self.log_decision(
                decision_type="transfer_opportunities",
                input_data={
                    "products": len(products),
                    "locations": self.location_registry.location_ids(),
                },
                output_data={
                    "count": len(insights),
                    "transfers": [i.metadata for i in insights],
                },
                reasoning=f"{len(insights)} kârlı transfer fırsatı bulundu.",
            )
        return insights

    def process(self, products: Sequence[Product], sales: Sequence[Sale]) -> list[StrategicInsight]:
        """Ana işlem: transfer fırsatlarını bul."""
        return self.find_transfer_opportunities(products, sales)
