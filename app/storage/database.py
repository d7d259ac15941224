"""
SQL database storage service implementation.

Stores each blob as a row in the ``stored_blobs`` table, which suits
deployments that already run a database and have no shared filesystem.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.database.base import create_tables
from app.database.models import StoredBlob

from .base import StorageError, StorageNotFoundError, StorageService

logger = logging.getLogger(__name__)


class DatabaseStorageService(StorageService):
    """Storage service backed by a SQLAlchemy engine."""

    def __init__(self, engine: Engine, create_schema: bool = True):
        """
        Initialize the database storage service.

        Args:
            engine: SQLAlchemy engine to store blobs with
            create_schema: Whether to create the blob table if missing
        """
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

        if create_schema:
            try:
                create_tables(engine)
            except SQLAlchemyError as e:
                raise StorageError(f"Failed to create storage tables: {e}")

    def _find(self, session, key: str) -> Optional[StoredBlob]:
        return session.execute(
            select(StoredBlob).where(StoredBlob.key == key)
        ).scalar_one_or_none()

    def write(
        self, key: str, content: bytes, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        content_type = (
            metadata.get("content_type", "application/octet-stream")
            if metadata
            else "application/octet-stream"
        )
        try:
            with self._session_factory() as session, session.begin():
                blob = self._find(session, key)
                if blob is None:
                    blob = StoredBlob(key=key)
                    session.add(blob)
                blob.content = content
                blob.content_type = content_type
                blob.blob_metadata = dict(metadata) if metadata is not None else None
                blob.updated_at = datetime.now(timezone.utc)
            logger.debug(f"Stored {len(content)} bytes under {key}")
            return key
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {key}: {e}")

    def read(self, key: str) -> bytes:
        try:
            with self._session_factory() as session:
                blob = self._find(session, key)
                if blob is None:
                    raise StorageNotFoundError(f"Key not found: {key}")
                return bytes(blob.content)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {key}: {e}")

    def delete(self, key: str) -> bool:
        try:
            with self._session_factory() as session, session.begin():
                blob = self._find(session, key)
                if blob is None:
                    return False
                session.delete(blob)
            return True
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete {key}: {e}")

    def exists(self, key: str) -> bool:
        try:
            with self._session_factory() as session:
                return self._find(session, key) is not None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to check {key}: {e}")

    def get_metadata(self, key: str) -> Dict[str, Any]:
        try:
            with self._session_factory() as session:
                blob = self._find(session, key)
                if blob is None:
                    raise StorageNotFoundError(f"Key not found: {key}")
                metadata: Dict[str, Any] = {
                    "size": len(blob.content),
                    "content_type": blob.content_type,
                    "created_at": blob.created_at.isoformat(),
                    "modified_at": blob.updated_at.isoformat(),
                }
                metadata.update(blob.blob_metadata or {})
                return metadata
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to get metadata for {key}: {e}")

    def list_keys(self, prefix: str = "") -> list[str]:
        try:
            with self._session_factory() as session:
                query = select(StoredBlob.key).order_by(StoredBlob.key)
                if prefix:
                    query = query.where(StoredBlob.key.startswith(prefix, autoescape=True))
                return list(session.execute(query).scalars())
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list keys with prefix {prefix}: {e}")
