"""Demo snapshot'ı üretir ve S3'e yükler.

Kullanım:
    python -m data_layer.scripts.publish_snapshot --bucket my-bucket
    python -m data_layer.scripts.publish_snapshot --bucket my-bucket --prefix snapshots/2025-06-30/
    python -m data_layer.scripts.publish_snapshot --bucket my-bucket --region eu-west-1 --skip-generate
"""
import os
import sys

# Proje root'unu path'e ekle
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from dotenv import load_dotenv

from data_layer.generators.sample_data import generate_all
from data_layer.infrastructure.s3_snapshot import S3SnapshotProvider
from data_layer.records import SnapshotError


def main():
    load_dotenv(override=False)

    bucket = os.environ.get("STOCK_INSIGHT_S3_BUCKET")
    prefix = os.environ.get("STOCK_INSIGHT_S3_PREFIX", "snapshots/latest/")
    region = os.environ.get("AWS_DEFAULT_REGION", "us-west-2")
    data_dir = os.environ.get("STOCK_INSIGHT_SNAPSHOT_DIR", "data_layer/data")
    generate = True

    # Argümanları parse et
    args = sys.argv[1:]
    for i, arg in enumerate(args):
        if arg == "--bucket" and i + 1 < len(args):
            bucket = args[i + 1]
        elif arg == "--prefix" and i + 1 < len(args):
            prefix = args[i + 1]
        elif arg == "--region" and i + 1 < len(args):
            region = args[i + 1]
        elif arg == "--skip-generate":
            generate = False

    if not bucket:
        print("❌ Bucket belirtilmedi (--bucket veya STOCK_INSIGHT_S3_BUCKET)")
        sys.exit(1)

    print("=" * 60)
    print("📦 Snapshot Yayınlama")
    print(f"   Bucket: {bucket}  Prefix: {prefix}  Region: {region}")
    print("=" * 60)

    if generate:
        generate_all(output_dir=data_dir)

    provider = S3SnapshotProvider(bucket_name=bucket, prefix=prefix, region_name=region)
    try:
        keys = provider.upload(data_dir)
    except SnapshotError as e:
        print(f"❌ {e}")
        sys.exit(1)

    for key in keys:
        print(f"  ✓ s3://{bucket}/{key}")
    print("\n✅ Snapshot yüklendi!")


if __name__ == "__main__":
    main()
