"""
Persistence for the user's financial snapshot.

The whole snapshot is stored as one JSON blob under a fixed key. There are no
partial updates and no versioning; loading merges the saved record over the
current defaults so fields added since the last save get default values.
"""

import json
import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from app.models.snapshot import Snapshot, default_snapshot, merge_with_defaults
from app.storage.base import StorageError, StorageNotFoundError, StorageService

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "retiresafe_user_data"


class SnapshotStoreError(StorageError):
    """Raised when a stored snapshot cannot be decoded."""


class SnapshotStore:
    """Saves, loads and clears the snapshot under a single key."""

    def __init__(self, storage: StorageService, key: str = DEFAULT_SNAPSHOT_KEY):
        self.storage = storage
        self.key = key

    def save(self, snapshot: Snapshot) -> None:
        """Write the full snapshot, replacing whatever was stored."""
        payload = snapshot.model_dump_json().encode("utf-8")
        self.storage.write(self.key, payload, {"content_type": "application/json"})
        logger.info(f"Saved snapshot under {self.key} ({len(payload)} bytes)")

    def load(self, now: Optional[datetime] = None) -> Optional[Snapshot]:
        """
        Load the saved snapshot.

        Args:
            now: Timestamp used for ``last_updated`` if the saved record has none

        Returns:
            The saved snapshot merged over defaults, or None if nothing is saved

        Raises:
            SnapshotStoreError: If the stored record is corrupt or invalid
        """
        try:
            payload = self.storage.read(self.key)
        except StorageNotFoundError:
            return None

        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotStoreError(f"Stored snapshot {self.key} is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise SnapshotStoreError(f"Stored snapshot {self.key} is not a JSON object")

        try:
            return merge_with_defaults(data, now)
        except ValidationError as e:
            raise SnapshotStoreError(f"Stored snapshot {self.key} is invalid: {e}")

    def load_or_default(self, now: Optional[datetime] = None) -> Snapshot:
        """The saved snapshot, or a fresh default one on first run."""
        snapshot = self.load(now)
        if snapshot is None:
            logger.info(f"No snapshot under {self.key}, starting from defaults")
            return default_snapshot(now)
        return snapshot

    def clear(self) -> bool:
        """Delete the saved snapshot. Returns True if one existed."""
        deleted = self.storage.delete(self.key)
        if deleted:
            logger.info(f"Cleared snapshot under {self.key}")
        return deleted
