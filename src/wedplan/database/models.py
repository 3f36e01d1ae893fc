"""SQLAlchemy models for wedplan database."""

from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    CheckConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from wedplan.domain.entities import PaymentStatus

Base = declarative_base()

MONEY = Numeric(12, 2)


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    costs = relationship("Cost", back_populates="category")


class Cost(Base):
    """Cost model.

    amount_paid and payment_status are a cache of the payment ledger kept
    current by the reconciliation service.
    """

    __tablename__ = "costs"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    value = Column(MONEY, nullable=False)
    total_amount = Column(MONEY, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    due_date = Column(Date, nullable=True)
    paid_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    amount_paid = Column(MONEY, default=Decimal("0.00"), nullable=False)
    payment_status = Column(String(16), default=PaymentStatus.UNPAID.value, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint("amount_paid >= 0", name="ck_costs_amount_paid_non_negative"),
        CheckConstraint(
            "payment_status IN ('unpaid', 'partial', 'paid')",
            name="ck_costs_payment_status",
        ),
    )

    # Relationships
    category = relationship("Category", back_populates="costs")
    payments = relationship(
        "Payment",
        back_populates="cost",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Payment(Base):
    """Payment history model."""

    __tablename__ = "payment_history"

    id = Column(Integer, primary_key=True)
    cost_id = Column(
        Integer, ForeignKey("costs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(MONEY, nullable=False)
    payment_date = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    note = Column(Text, nullable=True)

    __table_args__ = (CheckConstraint("amount > 0", name="ck_payment_history_amount_positive"),)

    # Relationships
    cost = relationship("Cost", back_populates="payments")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine_kwargs = {}
    if database_url.startswith("sqlite"):
        # Sessions are used from request worker threads.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, echo=False, **engine_kwargs)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
