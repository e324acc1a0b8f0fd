"""Stok ve satış analitiği veri modelleri."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class StockHealthStatus(str, Enum):
    OVERSTOCK = "Overstock"
    STOCKOUT_RISK = "Stockout Risk"
    HEALTHY = "Healthy"
    DEAD_STOCK = "Dead Stock"


class InsightType(str, Enum):
    PROFIT_OPTIMIZATION = "Profit Optimization"
    RISK_MITIGATION = "Risk Mitigation"
    CASH_FLOW = "Cash Flow"
    GROWTH = "Growth"

    @property
    def priority(self) -> int:
        """Sıralamada kullanılan kategori önceliği (yüksek önce)."""
        return INSIGHT_PRIORITY[self]


INSIGHT_PRIORITY: dict[InsightType, int] = {
    InsightType.RISK_MITIGATION: 3,
    InsightType.PROFIT_OPTIMIZATION: 2,
    InsightType.CASH_FLOW: 1,
    InsightType.GROWTH: 0,
}


class ActionType(str, Enum):
    TRANSFER = "TRANSFER"
    LIQUIDATE = "LIQUIDATE"
    REORDER = "REORDER"
    PRICE_ADJUST = "PRICE_ADJUST"


class ForecastTrend(str, Enum):
    HIGH_GROWTH = "High Growth"
    STABLE = "Stable"
    DECLINING = "Declining"
    NEW = "New"


@dataclass(frozen=True)
class Location:
    location_id: str
    name: str = ""


@dataclass
class Product:
    product_id: str
    name: str
    cost: float = 0.0
    price: float = 0.0
    stock: dict[str, int] = field(default_factory=dict)

    @property
    def total_stock(self) -> int:
        return sum(self.stock.values())

    @property
    def margin(self) -> float:
        return (self.price or 0.0) - (self.cost or 0.0)

    def stock_at(self, location_id: str) -> int:
        return self.stock.get(location_id, 0)


@dataclass(frozen=True)
class SaleItem:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class Sale:
    sale_id: str
    date: datetime
    location_id: str
    items: tuple[SaleItem, ...] = ()

    def quantity_of(self, product_id: str) -> int:
        """Bu satıştaki ürün miktarını döndürür (eşleşen tüm kalemlerin toplamı)."""
        return sum(i.quantity for i in self.items if i.product_id == product_id)

    def contains(self, product_id: str) -> bool:
        return any(i.product_id == product_id for i in self.items)


@dataclass(frozen=True)
class LocationStats:
    location_id: str
    stock: int
    velocity: float
    cover: float
    unbounded_cover: bool = False


@dataclass
class StockHealth:
    product_id: str
    status: StockHealthStatus
    cover_days: float
    aging_score: float
    unbounded_cover: bool = False

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "status": self.status.value,
            "coverDays": self.cover_days,
            "agingScore": self.aging_score,
            "unboundedCover": self.unbounded_cover,
        }


@dataclass
class StrategicInsight:
    insight_id: str
    type: InsightType
    problem: str
    impact: str
    recommended_action: str
    roi_impact: str
    confidence_score: float
    action_type: ActionType
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.insight_id,
            "type": self.type.value,
            "problem": self.problem,
            "impact": self.impact,
            "recommendedAction": self.recommended_action,
            "roiImpact": self.roi_impact,
            "confidenceScore": self.confidence_score,
            "actionType": self.action_type.value,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class HistoryPoint:
    date: str  # YYYY-MM-DD (UTC)
    value: int


@dataclass
class ProductForecast:
    product_id: str
    name: str
    current_monthly_sales: int
    previous_monthly_sales: int
    growth_rate: float
    trend: ForecastTrend
    forecasted_sales: int
    confidence: float
    history: list[HistoryPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "name": self.name,
            "currentMonthlySales": self.current_monthly_sales,
            "previousMonthlySales": self.previous_monthly_sales,
            "growthRate": self.growth_rate,
            "trend": self.trend.value,
            "forecastedSales": self.forecasted_sales,
            "confidence": self.confidence,
            "history": [{"date": h.date, "value": h.value} for h in self.history],
        }


@dataclass
class AnalysisDecision:
    decision_id: str
    analyzer_name: str
    decision_type: str
    input_data: dict
    output_data: dict
    reasoning: str
    timestamp: Optional[str] = None
