"""Sales Forecaster unit testleri."""

import copy
from datetime import datetime, timedelta, timezone

import pytest

from stock_insight import generate_product_forecasts
from stock_insight.analyzers.forecaster import SalesForecaster
from stock_insight.clock import FixedClock
from stock_insight.models.inventory import ForecastTrend, Product, Sale, SaleItem

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def _create_forecaster() -> SalesForecaster:
    return SalesForecaster(clock=FixedClock(NOW))


def _sale(sale_id: str, days_ago: float, product_id: str, qty: int) -> Sale:
    return Sale(sale_id, NOW - timedelta(days=days_ago), "A", (SaleItem(product_id, qty),))


def _windows(product_id: str, current: int, previous: int) -> list:
    sales = []
    if current:
        sales.append(_sale(f"C-{product_id}", 5, product_id, current))
    if previous:
        sales.append(_sale(f"P-{product_id}", 45, product_id, previous))
    return sales


PRODUCT = Product("P1", "Kahve", cost=10, price=20)


class TestGrowthAndTrend:
    """Büyüme oranı ve trend sınıflandırması."""

    def test_new_product(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, _windows("P1", 15, 0))
        assert forecast.growth_rate == 100
        assert forecast.trend == ForecastTrend.NEW
        assert forecast.forecasted_sales == 15

    def test_high_growth(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, _windows("P1", 20, 10))
        assert forecast.growth_rate == pytest.approx(100.0)
        assert forecast.trend == ForecastTrend.HIGH_GROWTH
        assert forecast.forecasted_sales == 24

    def test_declining(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, _windows("P1", 10, 20))
        assert forecast.growth_rate == pytest.approx(-50.0)
        assert forecast.trend == ForecastTrend.DECLINING
        assert forecast.forecasted_sales == 9

    def test_stable(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, _windows("P1", 11, 10))
        assert forecast.growth_rate == pytest.approx(10.0)
        assert forecast.trend == ForecastTrend.STABLE
        assert forecast.forecasted_sales == 11

    def test_thresholds_are_inclusive(self):
        forecaster = _create_forecaster()
        assert forecaster.forecast_product(PRODUCT, _windows("P1", 12, 10)).trend == ForecastTrend.HIGH_GROWTH
        assert forecaster.forecast_product(PRODUCT, _windows("P1", 8, 10)).trend == ForecastTrend.DECLINING

    def test_no_sales(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, [])
        assert forecast.growth_rate == 0
        assert forecast.trend == ForecastTrend.STABLE
        assert forecast.forecasted_sales == 0
        assert forecast.history == []

    def test_sales_stopped(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, _windows("P1", 0, 10))
        assert forecast.growth_rate == pytest.approx(-100.0)
        assert forecast.trend == ForecastTrend.DECLINING
        assert forecast.forecasted_sales == 0


class TestWindowsAndHistory:
    """30/60 günlük pencereler ve günlük satış geçmişi."""

    def test_window_boundaries(self):
        sales = [
            _sale("S1", 30, "P1", 4),  # güncel pencerenin başı
            _sale("S2", 60, "P1", 7),  # önceki pencerenin başı
            _sale("S3", 61, "P1", 100),  # kapsam dışı
        ]
        forecast = _create_forecaster().forecast_product(PRODUCT, sales)
        assert forecast.current_monthly_sales == 4
        assert forecast.previous_monthly_sales == 7

    def test_history_summed_per_day_and_sorted(self):
        sales = [
            _sale("S1", 2, "P1", 3),
            _sale("S2", 40, "P1", 1),
            Sale("S3", NOW - timedelta(days=2, hours=1), "B", (SaleItem("P1", 2), SaleItem("P9", 50))),
            _sale("S4", 70, "P1", 9),  # 60 günden eski, geçmişe girmez
        ]
        forecast = _create_forecaster().forecast_product(PRODUCT, sales)

        assert [(h.date, h.value) for h in forecast.history] == [
            ((NOW - timedelta(days=40)).date().isoformat(), 1),
            ((NOW - timedelta(days=2)).date().isoformat(), 5),
        ]
        assert sum(h.value for h in forecast.history) == (
            forecast.current_monthly_sales + forecast.previous_monthly_sales
        )

    def test_other_products_ignored(self):
        forecast = _create_forecaster().forecast_product(PRODUCT, [_sale("S1", 1, "P2", 50)])
        assert forecast.current_monthly_sales == 0


class TestForecastGeneration:
    """Tüm ürünler için tahmin ve sıralama."""

    def test_sorted_by_forecast_desc(self):
        products = [
            Product("P1", "Az"),
            Product("P2", "Çok"),
            Product("P3", "Orta"),
        ]
        sales = _windows("P1", 3, 3) + _windows("P2", 40, 10) + _windows("P3", 12, 12)
        forecasts = _create_forecaster().generate(products, sales)
        assert [f.product_id for f in forecasts] == ["P2", "P3", "P1"]
        values = [f.forecasted_sales for f in forecasts]
        assert values == sorted(values, reverse=True)

    def test_ties_keep_input_order(self):
        products = [Product("P1", "Bir"), Product("P2", "İki"), Product("P3", "Üç")]
        forecasts = generate_product_forecasts(products, [], clock=FixedClock(NOW))
        assert [f.product_id for f in forecasts] == ["P1", "P2", "P3"]

    def test_fixed_confidence_and_to_dict(self):
        forecasts = _create_forecaster().generate([PRODUCT], _windows("P1", 20, 10))
        data = forecasts[0].to_dict()
        assert data["confidence"] == 0.85
        assert data["trend"] == "High Growth"
        assert data["forecastedSales"] == 24
        assert data["currentMonthlySales"] == 20
        assert data["previousMonthlySales"] == 10
        assert all(set(h) == {"date", "value"} for h in data["history"])

    def test_idempotent_and_pure(self):
        products = [Product("P1", "Bir", stock={"A": 4}), Product("P2", "İki")]
        sales = _windows("P1", 20, 10) + _windows("P2", 5, 0)
        products_before = copy.deepcopy(products)
        sales_before = copy.deepcopy(sales)

        first = generate_product_forecasts(products, sales, clock=FixedClock(NOW))
        second = generate_product_forecasts(products, sales, clock=FixedClock(NOW))

        assert [f.to_dict() for f in first] == [f.to_dict() for f in second]
        assert products == products_before
        assert sales == sales_before
