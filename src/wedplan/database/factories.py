"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from wedplan.config import Settings, get_settings
from wedplan.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL."""
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, falls back to
            the configured database path (WEDPLAN_DB_PATH), then to
            ~/.wedplan/wedplan.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = get_settings().DB_PATH

    if database_path is None:
        db_dir = Path.home() / ".wedplan"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "wedplan.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_configured_database(
    database_path: Optional[str] = None, settings: Optional[Settings] = None
) -> SQLAlchemyDatabase:
    """Create the database selected by arguments and settings.

    An explicit path wins, then WEDPLAN_DATABASE_URL, then the SQLite
    fallbacks of create_sqlite_database().
    """
    settings = settings or get_settings()
    if database_path is None and settings.DATABASE_URL:
        return create_database(settings.DATABASE_URL)
    return create_sqlite_database(database_path or settings.DB_PATH)
