"""S3 üzerinden snapshot okuma.

Bucket yapısı:
  {bucket}/
  └── {prefix}
      ├── products.json
      └── sales.json
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from data_layer.providers import PRODUCTS_FILE, SALES_FILE, SnapshotProvider
from data_layer.records import SnapshotError, SnapshotNotFoundError, parse_snapshot
from stock_insight.models.inventory import Product, Sale

logger = logging.getLogger(__name__)

_MISSING_CODES = ("NoSuchKey", "NoSuchBucket", "404")


class S3SnapshotProvider(SnapshotProvider):
    """S3 bucket'ındaki JSON snapshot'ı okuyan sağlayıcı."""

    def __init__(
        self,
        bucket_name: str,
        prefix: str = "snapshots/latest/",
        region_name: str = "us-west-2",
        s3_client: Optional[Any] = None,
    ):
        self.bucket_name = bucket_name
        self.prefix = prefix if not prefix or prefix.endswith("/") else prefix + "/"
        # AWS istemcisi - dependency injection destekli
        self.s3 = s3_client or boto3.client("s3", region_name=region_name)

    def _key(self, filename: str) -> str:
        return f"{self.prefix}{filename}"

    def _read(self, filename: str) -> list[dict]:
        key = self._key(filename)
        try:
            response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
            body = response["Body"].read()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _MISSING_CODES:
                raise SnapshotNotFoundError(f"s3://{self.bucket_name}/{key} bulunamadı") from e
            logger.error("S3 okuma hatası [%s]: %s", key, e)
            raise SnapshotError(f"s3://{self.bucket_name}/{key} okunamadı: {code}") from e

        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"s3://{self.bucket_name}/{key} geçerli JSON değil") from e
        if not isinstance(data, list):
            raise SnapshotError(f"s3://{self.bucket_name}/{key} bir JSON listesi içermelidir")
        return data

    def load(self) -> tuple[list[Product], list[Sale]]:
        logger.info("S3 snapshot okunuyor: s3://%s/%s", self.bucket_name, self.prefix)
        return parse_snapshot(self._read(PRODUCTS_FILE), self._read(SALES_FILE))

    def upload(self, data_dir: str = "data_layer/data") -> list[str]:
        """Yerel products.json ve sales.json dosyalarını prefix altına yükler."""
        uploaded = []
        for filename in (PRODUCTS_FILE, SALES_FILE):
            local_path = os.path.join(data_dir, filename)
            if not os.path.exists(local_path):
                raise SnapshotNotFoundError(f"{local_path} bulunamadı")
            key = self._key(filename)
            self.s3.upload_file(local_path, self.bucket_name, key)
            logger.info("Yüklendi: s3://%s/%s", self.bucket_name, key)
            uploaded.append(key)
        return uploaded
