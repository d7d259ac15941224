"""
Key/blob storage backends (local filesystem, S3, SQL database).
"""

from .base import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageService,
)
from .database import DatabaseStorageService
from .factory import create_storage_service, get_storage_service
from .local import LocalStorageService
from .s3 import S3StorageService

__all__ = [
    "StorageService",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "DatabaseStorageService",
    "LocalStorageService",
    "S3StorageService",
    "create_storage_service",
    "get_storage_service",
]
