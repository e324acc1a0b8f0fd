"""Snapshot sağlayıcıları: yerel JSON dizini ve ortam bazlı seçim."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional

from data_layer.records import SnapshotError, SnapshotNotFoundError, parse_snapshot
from stock_insight.models.inventory import Product, Sale

logger = logging.getLogger(__name__)

PRODUCTS_FILE = "products.json"
SALES_FILE = "sales.json"


class SnapshotProvider(ABC):
    """Analiz için (ürünler, satışlar) snapshot'ı sağlar."""

    @abstractmethod
    def load(self) -> tuple[list[Product], list[Sale]]:
        ...


class JsonDirectorySnapshotProvider(SnapshotProvider):
    """Bir dizindeki products.json ve sales.json dosyalarını okur."""

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _read(self, filename: str) -> list[dict]:
        path = self.directory / filename
        if not path.exists():
            raise SnapshotNotFoundError(f"{path} bulunamadı")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"{path} geçerli JSON değil: {e}") from e
        if not isinstance(data, list):
            raise SnapshotError(f"{path} bir JSON listesi içermelidir")
        return data

    def load(self) -> tuple[list[Product], list[Sale]]:
        return parse_snapshot(self._read(PRODUCTS_FILE), self._read(SALES_FILE))


def provider_from_env(environ: Optional[Mapping[str, str]] = None) -> SnapshotProvider:
    """STOCK_INSIGHT_S3_BUCKET varsa S3, yoksa STOCK_INSIGHT_SNAPSHOT_DIR dizini."""
    env: Mapping[str, Any] = os.environ if environ is None else environ

    bucket = env.get("STOCK_INSIGHT_S3_BUCKET")
    if bucket:
        from data_layer.infrastructure.s3_snapshot import S3SnapshotProvider

        return S3SnapshotProvider(
            bucket_name=bucket,
            prefix=env.get("STOCK_INSIGHT_S3_PREFIX", "snapshots/latest/"),
            region_name=env.get("AWS_DEFAULT_REGION", "us-west-2"),
        )

    directory = env.get("STOCK_INSIGHT_SNAPSHOT_DIR", "data_layer/data")
    logger.info("Yerel snapshot dizini kullanılıyor: %s", directory)
    return JsonDirectorySnapshotProvider(directory)
