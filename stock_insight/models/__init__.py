from stock_insight.models.inventory import (
    INSIGHT_PRIORITY,
    ActionType,
    AnalysisDecision,
    ForecastTrend,
    HistoryPoint,
    InsightType,
    Location,
    LocationStats,
    Product,
    ProductForecast,
    Sale,
    SaleItem,
    StockHealth,
    StockHealthStatus,
    StrategicInsight,
)

__all__ = [
    "INSIGHT_PRIORITY",
    "ActionType",
    "AnalysisDecision",
    "ForecastTrend",
    "HistoryPoint",
    "InsightType",
    "Location",
    "LocationStats",
    "Product",
    "ProductForecast",
    "Sale",
    "SaleItem",
    "StockHealth",
    "StockHealthStatus",
    "StrategicInsight",
]
