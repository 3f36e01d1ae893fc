"""Database layer for wedplan application."""

from wedplan.database.base import (
    CategoryRepository,
    CostRepository,
    Database,
    PaymentRepository,
)
from wedplan.database.factories import (
    create_configured_database,
    create_database,
    create_sqlite_database,
)
from wedplan.database.memory import InMemoryDatabase

__all__ = [
    "CategoryRepository",
    "CostRepository",
    "Database",
    "PaymentRepository",
    "InMemoryDatabase",
    "create_configured_database",
    "create_database",
    "create_sqlite_database",
]
