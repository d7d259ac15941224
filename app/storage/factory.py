"""
Build the configured blob store.

``STORAGE_TYPE`` selects the backend: ``local`` (files under
``STORAGE_BASE_PATH``), ``s3`` (a bucket, optionally under a prefix) or
``database`` (rows in ``DB_URL``).
"""

import logging

from app.config import Settings, get_global_settings
from app.database.base import build_engine

from .base import StorageService
from .database import DatabaseStorageService
from .local import LocalStorageService
from .s3 import S3StorageService

logger = logging.getLogger(__name__)


def create_storage_service(settings: Settings) -> StorageService:
    """
    Create the blob store described by ``settings``.

    Raises:
        ValueError: If the storage type is unknown or S3 has no bucket
        StorageError: If the backend cannot be reached
    """
    storage_type = settings.storage_type
    logger.info(f"Using {storage_type} storage")

    if storage_type == "local":
        return LocalStorageService(base_path=settings.storage_base_path)

    if storage_type == "s3":
        if not settings.s3_bucket_name:
            raise ValueError("S3_BUCKET_NAME must be set when using S3 storage")
        return S3StorageService(
            bucket_name=settings.s3_bucket_name,
            region_name=settings.s3_region_name,
            aws_access_key_id=settings.s3_access_key_id,
            aws_secret_access_key=settings.s3_secret_access_key,
            prefix=settings.s3_prefix,
        )

    if storage_type == "database":
        return DatabaseStorageService(build_engine(settings.db_url))

    raise ValueError(f"Unsupported storage type: {storage_type}")


def get_storage_service() -> StorageService:
    """Blob store for the global settings."""
    return create_storage_service(get_global_settings())
