"""
Local filesystem storage service implementation.

Each key maps to a file under a base directory. Metadata, when given, is
kept in a sidecar ``.meta`` JSON file next to the blob.
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .base import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageService,
)

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".meta"


class LocalStorageService(StorageService):
    """Local filesystem storage service."""

    def __init__(self, base_path: str = "storage", create_dirs: bool = True):
        """
        Initialize the local storage service.

        Args:
            base_path: Base directory for stored blobs
            create_dirs: Whether to create directories if they don't exist
        """
        self.base_path = Path(base_path)
        self.create_dirs = create_dirs

        if self.create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_path(self, key: str) -> Path:
        """Resolve a key to a path inside ``base_path``."""
        # ".." segments pop a level but never escape base_path
        parts: list[str] = []
        for part in key.replace("\\", "/").split("/"):
            if part == "..":
                if parts:
                    parts.pop()
            elif part and part != ".":
                parts.append(part)

        if not parts:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.base_path.joinpath(*parts)

    def _get_metadata_path(self, key: str) -> Path:
        path = self._get_path(key)
        return path.with_name(path.name + METADATA_SUFFIX)

    def write(
        self, key: str, content: bytes, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        try:
            path = self._get_path(key)
            if self.create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)

            with open(path, "wb") as f:
                f.write(content)

            if metadata is not None:
                metadata_data = {
                    "created_at": datetime.now(timezone.utc).isoformat(),
                    "size": len(content),
                    "content_type": metadata.get(
                        "content_type", "application/octet-stream"
                    ),
                    **metadata,
                }
                with open(self._get_metadata_path(key), "w") as f:
                    json.dump(metadata_data, f, indent=2)

            logger.debug(f"Wrote {len(content)} bytes to {path}")
            return key

        except PermissionError as e:
            raise StoragePermissionError(f"Permission denied writing {key}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}")

    def read(self, key: str) -> bytes:
        path = self._get_path(key)
        if not path.exists():
            raise StorageNotFoundError(f"Key not found: {key}")

        try:
            with open(path, "rb") as f:
                return f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Permission denied reading {key}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}")

    def delete(self, key: str) -> bool:
        try:
            path = self._get_path(key)
            metadata_path = self._get_metadata_path(key)

            deleted = False
            if path.exists():
                path.unlink()
                deleted = True
            if metadata_path.exists():
                metadata_path.unlink()

            return deleted

        except PermissionError as e:
            raise StoragePermissionError(f"Permission denied deleting {key}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}")

    def exists(self, key: str) -> bool:
        return self._get_path(key).exists()

    def get_metadata(self, key: str) -> Dict[str, Any]:
        path = self._get_path(key)
        if not path.exists():
            raise StorageNotFoundError(f"Key not found: {key}")

        stat = path.stat()
        metadata: Dict[str, Any] = {
            "size": stat.st_size,
            "modified_at": datetime.fromtimestamp(stat.st_mtime, timezone.utc).isoformat(),
            "content_type": "application/octet-stream",
        }

        metadata_path = self._get_metadata_path(key)
        if metadata_path.exists():
            try:
                with open(metadata_path, "r") as f:
                    metadata.update(json.load(f))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable metadata for {key}: {e}")

        return metadata

    def list_keys(self, prefix: str = "") -> list[str]:
        try:
            keys = []
            for root, _dirs, filenames in os.walk(self.base_path):
                for filename in filenames:
                    if filename.endswith(METADATA_SUFFIX):
                        continue
                    relative = (Path(root) / filename).relative_to(self.base_path)
                    key = relative.as_posix()
                    if key.startswith(prefix):
                        keys.append(key)
            return sorted(keys)

        except OSError as e:
            raise StorageError(f"Failed to list keys with prefix {prefix}: {e}")
