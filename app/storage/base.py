"""
Base storage service interface and exceptions.

A storage service is a flat key/blob store. Keys are slash-separated names;
values are bytes with optional JSON-serializable metadata.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StorageError(Exception):
    """Base exception for storage-related errors."""


class StorageNotFoundError(StorageError):
    """Raised when a requested key is not found in storage."""


class StoragePermissionError(StorageError):
    """Raised when there are permission issues with storage operations."""


class StorageService(ABC):
    """
    Abstract base class for storage services.

    There is no transactional guarantee: the last write to a key wins.
    """

    @abstractmethod
    def write(
        self, key: str, content: bytes, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Store a blob under ``key``, replacing any existing value.

        Args:
            key: Storage key
            content: Blob content
            metadata: Optional metadata to store with the blob

        Returns:
            str: The key the blob was stored under

        Raises:
            StorageError: If the blob cannot be stored
        """

    @abstractmethod
    def read(self, key: str) -> bytes:
        """
        Read the blob stored under ``key``.

        Raises:
            StorageNotFoundError: If nothing is stored under the key
            StorageError: If the blob cannot be read
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete the blob stored under ``key``.

        Returns:
            bool: True if a blob was deleted, False if none existed

        Raises:
            StorageError: If the blob cannot be deleted
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a blob is stored under ``key``."""

    @abstractmethod
    def get_metadata(self, key: str) -> Dict[str, Any]:
        """
        Get metadata for the blob stored under ``key``.

        Returns:
            Dict containing at least ``size`` and ``content_type``

        Raises:
            StorageNotFoundError: If nothing is stored under the key
        """

    @abstractmethod
    def list_keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with ``prefix``, sorted."""
