from stock_insight.analyzers.base_analyzer import BaseAnalyzer
from stock_insight.analyzers.forecaster import SalesForecaster
from stock_insight.analyzers.insight_generator import InsightGenerator, rank_insights
from stock_insight.analyzers.stock_health import (
    StockHealthAnalyzer,
    analyze_stock_health,
    detect_dead_stock,
)
from stock_insight.analyzers.transfer_optimizer import TransferOptimizer

__all__ = [
    "BaseAnalyzer",
    "InsightGenerator",
    "SalesForecaster",
    "StockHealthAnalyzer",
    "TransferOptimizer",
    "analyze_stock_health",
    "detect_dead_stock",
    "rank_insights",
]
