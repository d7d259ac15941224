"""
Database base configuration.

Provides the SQLAlchemy declarative base and engine helpers for the database
storage backend.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import declarative_base

# Create the declarative base
Base = declarative_base()


def build_engine(db_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``db_url``."""
    return create_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
    )


def create_tables(engine: Engine) -> None:
    """Create all tables in the database."""
    Base.metadata.create_all(bind=engine)
