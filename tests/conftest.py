"""Shared pytest fixtures for wedplan tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from wedplan.database.factories import create_sqlite_database
from wedplan.database.memory import InMemoryDatabase
from wedplan.domain.budget import BudgetService
from wedplan.domain.category import CategoryService
from wedplan.domain.cost import CostService
from wedplan.domain.payment import PaymentLedger


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an in-memory database for testing."""
    db = InMemoryDatabase()
    db.connect()
    db.initialize_schema()
    return db


@pytest.fixture(params=["sqlite", "memory"])
def any_db(request):
    """Run a test against both database implementations."""
    return request.getfixturevalue("temp_db" if request.param == "sqlite" else "memory_db")


@pytest.fixture
def cost_service(any_db):
    """Create a CostService for each database implementation."""
    return CostService(any_db)


@pytest.fixture
def ledger(any_db):
    """Create a PaymentLedger for each database implementation."""
    return PaymentLedger(any_db)


@pytest.fixture
def category_service(any_db):
    """Create a CategoryService for each database implementation."""
    return CategoryService(any_db)


@pytest.fixture
def budget_service(any_db):
    """Create a BudgetService for each database implementation."""
    return BudgetService(any_db)


@pytest.fixture
def sample_category(category_service):
    """Create a sample category for testing."""
    category_id = category_service.create_category("Venue")
    return category_service.get_category(category_id)


@pytest.fixture
def sample_cost(cost_service, sample_category):
    """Create a venue cost with a deposit value and a full price."""
    return cost_service.create_cost(
        name="Castle venue",
        value=Decimal("1000"),
        total_amount=Decimal("10000"),
        category_id=sample_category.id,
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def api_client(temp_db):
    """Create a FastAPI test client bound to the temporary database."""
    from fastapi.testclient import TestClient

    from wedplan.api.app import create_app
    from wedplan.config import Settings

    app = create_app(db=temp_db, settings=Settings(TOTAL_BUDGET=Decimal("50000")))
    return TestClient(app)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop the CLI's log handler so it never outlives a runner's streams."""
    from wedplan.logging_config import reset_logging

    yield
    reset_logging()
