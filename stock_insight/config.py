"""Analiz motoru konfigürasyonu.

Tüm eşikler ve sabitler tek bir dataclass'ta tutulur. Ortam değişkenleri
(STOCK_INSIGHT_<ALAN_ADI>) ve proje kökündeki .env dosyası varsayılanları
ezebilir.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "STOCK_INSIGHT_"

_DOTENV_PATH = Path(__file__).resolve().parent.parent / ".env"


@dataclass(frozen=True)
class EngineConfig:
    # Talep hızı ve stok kapsamı
    velocity_window_days: int = 30
    optimal_cover_days: float = 30.0
    safety_stock_days: float = 7.0
    unbounded_cover_days: float = 999.0

    # Ölü stok
    dead_stock_threshold_days: int = 90
    dead_stock_min_capital: float = 1000.0
    liquidation_recovery_rate: float = 0.7

    # Depolar arası transfer
    overstock_cover_days: float = 60.0
    starving_cover_days: float = 10.0
    min_target_velocity: float = 0.1
    min_source_stock: int = 10
    max_transfer_share: float = 0.5
    target_cover_days: float = 30.0
    transfer_base_cost: float = 50.0
    transfer_unit_cost: float = 2.0

    # Yeniden sipariş
    reorder_cover_days: float = 14.0
    reorder_min_velocity: float = 0.5
    reorder_horizon_days: int = 30

    # Sıralama
    max_insights: int = 5

    # Tahmin
    forecast_window_days: int = 30
    high_growth_threshold: float = 20.0
    declining_threshold: float = -20.0
    new_product_growth_rate: float = 100.0
    high_growth_momentum: float = 1.2
    declining_momentum: float = 0.9
    stable_momentum: float = 1.0
    forecast_confidence: float = 0.85

    # Sunum
    currency_symbol: str = "₹"

    # Sabit güven skorları
    confidence_scores: Mapping[str, float] = field(
        default_factory=lambda: {"TRANSFER": 0.9, "LIQUIDATE": 0.85, "REORDER": 0.95}
    )

    def __post_init__(self) -> None:
        for name in (
            "velocity_window_days",
            "forecast_window_days",
            "reorder_horizon_days",
            "dead_stock_threshold_days",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} pozitif olmalıdır")
        if self.safety_stock_days < 0 or self.optimal_cover_days < 0:
            raise ValueError("Kapsam eşikleri negatif olamaz")
        if not 0 <= self.liquidation_recovery_rate <= 1:
            raise ValueError("liquidation_recovery_rate 0-1 arasında olmalıdır")
        if not 0 < self.max_transfer_share <= 1:
            raise ValueError("max_transfer_share 0-1 arasında olmalıdır")
        if self.max_insights < 0:
            raise ValueError("max_insights negatif olamaz")

    def confidence_for(self, action: str) -> float:
        return self.confidence_scores.get(action, 0.0)


def _coerce(raw: str, current: object) -> object:
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    return raw


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    base: Optional[EngineConfig] = None,
    use_dotenv: bool = True,
) -> EngineConfig:
    """Ortam değişkenlerinden EngineConfig üretir."""
    if environ is None:
        if use_dotenv:
            load_dotenv(_DOTENV_PATH, override=False)
        environ = os.environ

    config = base or EngineConfig()
    overrides: dict[str, object] = {}
    for f in fields(EngineConfig):
        if f.name == "confidence_scores":
            continue
        key = f"{ENV_PREFIX}{f.name.upper()}"
        raw = environ.get(key)
        if raw is None or raw == "":
            continue
        try:
            overrides[f.name] = _coerce(raw, getattr(config, f.name))
        except ValueError as e:
            raise ValueError(f"Geçersiz konfigürasyon değeri {key}={raw!r}") from e

    if overrides:
        logger.info("Konfigürasyon ortamdan güncellendi: %s", sorted(overrides))
        config = replace(config, **overrides)
    return config
