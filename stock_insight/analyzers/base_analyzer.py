"""Tüm analizörler için temel sınıf."""

from __future__ import annotations

import json
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from stock_insight.clock import Clock, SystemClock
from stock_insight.config import EngineConfig
from stock_insight.locations import LocationRegistry, StaticLocationRegistry
from stock_insight.models.inventory import AnalysisDecision

logger = logging.getLogger(__name__)


class BaseAnalyzer(ABC):
    """Saf stok analizörü temel sınıfı.

    Analizörler yalnızca değişmez konfigürasyon ve enjekte edilen
    işbirlikçileri (saat, lokasyon registry) tutar; çağrılar arasında durum
    taşımaz.
    """

    def __init__(
        self,
        analyzer_name: str,
        config: Optional[EngineConfig] = None,
        clock: Optional[Clock] = None,
        location_registry: Optional[LocationRegistry] = None,
    ):
        self.analyzer_name = analyzer_name
        # Bağımlılıklar - dependency injection destekli
        self.config = config or EngineConfig()
        self.clock = clock or SystemClock()
        self.location_registry = location_registry or StaticLocationRegistry()

        logger.debug("Analizör başlatıldı: %s", analyzer_name)

    def log_decision(
        self,
        decision_type: str,
        input_data: dict,
        output_data: dict,
        reasoning: str,
    ) -> AnalysisDecision:
        """Analiz kararını yapılandırılmış log kaydı olarak yazar."""
        decision = AnalysisDecision(
            decision_id=str(uuid.uuid4()),
            analyzer_name=self.analyzer_name,
            decision_type=decision_type,
            input_data=input_data,
            output_data=output_data,
            reasoning=reasoning,
            timestamp=self.clock.now().isoformat(),
        )
        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "[%s] %s: %s",
                self.analyzer_name,
                decision_type,
                json.dumps(
                    {
                        "decision_id": decision.decision_id,
                        "input_data": input_data,
                        "output_data": output_data,
                        "reasoning": reasoning,
                        "timestamp": decision.timestamp,
                    },
                    default=str,
                    ensure_ascii=False,
                ),
            )
        return decision

    @abstractmethod
    def process(self, *args: Any, **kwargs: Any) -> Any:
        """Her analizör kendi iş mantığını implement eder."""
        ...
