"""Temel stok metrikleri: talep hızı, stok kapsamı, yaşlandırma skoru.

Bu fonksiyonlar saf fonksiyonlardır; girdileri değiştirmez ve I/O yapmaz.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from stock_insight.clock import SystemClock, days_between, parse_timestamp
from stock_insight.models.inventory import Sale

# Stok var ama hareket yok: "sınırsız" kapsam
UNBOUNDED_COVER = 999.0


def resolve_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return SystemClock().now()
    return parse_timestamp(now)


def calculate_demand_velocity(
    product_id: str,
    sales: Sequence[Sale],
    days: int = 30,
    now: Optional[datetime] = None,
) -> float:
    """Son `days` gündeki ortalama günlük satış miktarı.

    Bölen her zaman pencere uzunluğudur; ürünün satış geçmişi daha kısa olsa
    bile hız seyreltilir.
    """
    if days <= 0:
        raise ValueError("Pencere uzunluğu pozitif olmalıdır")
    if not sales:
        return 0.0

    ref = resolve_now(now)
    window_start = ref - timedelta(days=days)

    total_qty = sum(
        s.quantity_of(product_id) for s in sales if window_start <= s.date <= ref
    )
    return total_qty / days


def calculate_inventory_cover(
    stock_quantity: float, velocity: float, unbounded: float = UNBOUNDED_COVER
) -> float:
    """Stok kapsamı (gün) = stok / talep hızı."""
    if velocity <= 0:
        return unbounded if stock_quantity > 0 else 0.0
    return stock_quantity / velocity


def is_unbounded_cover(stock_quantity: float, velocity: float) -> bool:
    """Kapsamın sentinel değerden mi geldiğini girdilerden belirler.

    Gerçek bir 999+ günlük kapsam (ör. 1500 stok, 1/gün) sınırsız sayılmaz.
    """
    return velocity <= 0 and stock_quantity > 0


def calculate_aging_score(
    last_movement_date: Optional[datetime],
    cover_days: float,
    now: Optional[datetime] = None,
) -> float:
    """Kapsama göre normalize edilmiş bekleme skoru.

    Skor > 1 ise stok beklenen devir süresinden daha uzun süredir hareketsiz.
    """
    if last_movement_date is None:
        return 0.0
    ref = resolve_now(now)
    days_since = days_between(parse_timestamp(last_movement_date), ref)
    return days_since / max(cover_days, 1.0)


def last_sale_date(product_id: str, sales: Iterable[Sale]) -> Optional[datetime]:
    """Ürünü içeren en son satışın tarihi (sıralamadan bağımsız)."""
    dates = [s.date for s in sales if s.contains(product_id)]
    return max(dates) if dates else None


def sales_at_location(sales: Iterable[Sale], location_id: str) -> list[Sale]:
    return [s for s in sales if s.location_id == location_id]
