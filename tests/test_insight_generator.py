"""Strategic Insight Generator unit testleri."""

import copy
from datetime import datetime, timedelta, timezone

from stock_insight import generate_strategic_insights
from stock_insight.analyzers.insight_generator import InsightGenerator, rank_insights
from stock_insight.clock import FixedClock
from stock_insight.config import EngineConfig
from stock_insight.locations import StaticLocationRegistry
from stock_insight.models.inventory import (
    ActionType,
    InsightType,
    Product,
    Sale,
    SaleItem,
    StrategicInsight,
)

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def _create_generator(locations=("A", "B"), config=None) -> InsightGenerator:
    return InsightGenerator(
        config=config,
        clock=FixedClock(NOW),
        location_registry=StaticLocationRegistry(list(locations)),
    )


def _sale(sale_id: str, days_ago: float, location_id: str, product_id: str, qty: int) -> Sale:
    return Sale(sale_id, NOW - timedelta(days=days_ago), location_id, (SaleItem(product_id, qty),))


def _insight(insight_id: str, insight_type: InsightType) -> StrategicInsight:
    return StrategicInsight(
        insight_id=insight_id,
        type=insight_type,
        problem="",
        impact="",
        recommended_action="",
        roi_impact="",
        confidence_score=0.5,
        action_type=ActionType.PRICE_ADJUST,
    )


def _mixed_snapshot():
    products = [
        Product("T", "Transfer Ürünü", cost=10, price=20, stock={"A": 100, "B": 2}),
        Product("D", "Ölü Stok", cost=100, price=150, stock={"A": 20}),
        Product("R", "Hızlı Satan", cost=10, price=20, stock={"A": 5}),
    ]
    sales = [
        _sale("S1", 3, "B", "T", 15),
        _sale("S2", 2, "A", "R", 30),
    ]
    return products, sales


class TestDeadStockInsights:
    """Sermaye bağlayan ölü stok için tasfiye önerisi."""

    def test_liquidation_insight(self):
        generator = _create_generator()
        product = Product("D", "Yemek Takımı", cost=100, price=150, stock={"A": 20})
        insights = generator.find_dead_stock([product], [])

        assert len(insights) == 1
        insight = insights[0]
        assert insight.insight_id == "deadstock-D"
        assert insight.type == InsightType.CASH_FLOW
        assert insight.action_type == ActionType.LIQUIDATE
        assert insight.confidence_score == 0.85
        assert insight.problem == "Dead Stock: Yemek Takımı"
        assert insight.impact == "₹2,000 capital blocked"
        assert insight.recommended_action == "Liquidate 20 units. Run clearance sale."
        assert insight.roi_impact == "Recover ~₹1,400"
        assert insight.metadata["currentStock"] == 20
        assert insight.metadata["capitalBlocked"] == 2000

    def test_immaterial_amount_skipped(self):
        generator = _create_generator()
        product = Product("D", "Ucuz", cost=100, price=150, stock={"A": 10})
        assert generator.find_dead_stock([product], []) == []

    def test_recently_sold_not_flagged(self):
        generator = _create_generator()
        product = Product("D", "Satılan", cost=100, price=150, stock={"A": 20})
        assert generator.find_dead_stock([product], [_sale("S1", 10, "A", "D", 1)]) == []


class TestReorderInsights:
    """Stok tükenme riski için yeniden sipariş önerisi."""

    def test_reorder_insight(self):
        generator = _create_generator(locations=("A",))
        product = Product("R", "Yağ", cost=10, price=20, stock={"A": 5})
        insights = generator.find_reorder_risks([product], [_sale("S1", 2, "A", "R", 30)])

        assert len(insights) == 1
        insight = insights[0]
        assert insight.insight_id == "reorder-R"
        assert insight.type == InsightType.RISK_MITIGATION
        assert insight.action_type == ActionType.REORDER
        assert insight.confidence_score == 0.95
        assert insight.impact == "Only 5 days of stock left"
        assert insight.recommended_action == "Place urgent reorder for 30 units"
        assert insight.roi_impact == "Protect ~₹140 profit"
        assert insight.metadata["reorderQty"] == 30

    def test_velocity_must_exceed_threshold(self):
        generator = _create_generator()
        product = Product("R", "Yağ", cost=10, price=20, stock={"A": 1})
        sales = [_sale("S1", 2, "A", "R", 15)]  # hız tam 0.5
        assert generator.find_reorder_risks([product], sales) == []

    def test_enough_cover_not_flagged(self):
        generator = _create_generator()
        product = Product("R", "Yağ", cost=10, price=20, stock={"A": 14})
        assert generator.find_reorder_risks([product], [_sale("S1", 2, "A", "R", 30)]) == []

    def test_negative_margin_is_reported_as_is(self):
        generator = _create_generator()
        product = Product("R", "Zararına", cost=10, price=5, stock={"A": 0})
        insights = generator.find_reorder_risks([product], [_sale("S1", 2, "A", "R", 30)])
        assert insights[0].roi_impact == "Protect ~₹-70 profit"
        assert insights[0].metadata["profitAtRisk"] == -70


class TestInsightRanking:
    """Kategori önceliğine göre sıralama ve ilk 5 kesme."""

    def test_priority_order(self):
        generator = _create_generator()
        products, sales = _mixed_snapshot()
        insights = generator.generate(products, sales)

        assert [i.insight_id for i in insights] == ["reorder-R", "transfer-T-A-B", "deadstock-D"]

    def test_sorted_and_truncated(self):
        generator = _create_generator()
        products = [
            Product(f"D{n}", f"Ölü {n}", cost=500, price=600, stock={"A": 10})
            for n in range(1, 8)
        ]
        insights = generator.generate(products, [])

        assert len(insights) == 5
        # Kategori içinde ekleme sırası korunur
        assert [i.insight_id for i in insights] == [f"deadstock-D{n}" for n in range(1, 6)]

    def test_rank_is_stable(self):
        insights = [
            _insight("g1", InsightType.GROWTH),
            _insight("c1", InsightType.CASH_FLOW),
            _insight("r1", InsightType.RISK_MITIGATION),
            _insight("c2", InsightType.CASH_FLOW),
            _insight("p1", InsightType.PROFIT_OPTIMIZATION),
            _insight("r2", InsightType.RISK_MITIGATION),
        ]
        ranked = rank_insights(insights, limit=10)
        assert [i.insight_id for i in ranked] == ["r1", "r2", "p1", "c1", "c2", "g1"]
        priorities = [i.type.priority for i in ranked]
        assert priorities == sorted(priorities, reverse=True)

    def test_configurable_limit(self):
        generator = _create_generator(config=EngineConfig(max_insights=2))
        products, sales = _mixed_snapshot()
        assert len(generator.generate(products, sales)) == 2

    def test_idempotent_and_pure(self):
        products, sales = _mixed_snapshot()
        before = copy.deepcopy(products)

        first = generate_strategic_insights(
            products, sales,
            clock=FixedClock(NOW),
            location_registry=StaticLocationRegistry(["A", "B"]),
        )
        second = generate_strategic_insights(
            products, sales,
            clock=FixedClock(NOW),
            location_registry=StaticLocationRegistry(["A", "B"]),
        )

        assert [i.to_dict() for i in first] == [i.to_dict() for i in second]
        assert products == before

    def test_to_dict_contract(self):
        generator = _create_generator()
        products, sales = _mixed_snapshot()
        data = generator.generate(products, sales)[0].to_dict()
        assert set(data) == {
            "id", "type", "problem", "impact", "recommendedAction",
            "roiImpact", "confidenceScore", "actionType", "metadata",
        }
        assert data["type"] == "Risk Mitigation"
        assert data["actionType"] == "REORDER"
