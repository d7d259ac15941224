"""Database models and configuration for the retirement runway planner."""

from .base import Base, build_engine, create_tables
from .models import StoredBlob

__all__ = [
    "Base",
    "build_engine",
    "create_tables",
    "StoredBlob",
]
