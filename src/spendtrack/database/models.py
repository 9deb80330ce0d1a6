"""SQLAlchemy models for the spendtrack database."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Expense category model."""

    __tablename__ = "categories"

    code = Column(String(50), primary_key=True)
    description = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    expense_entries = relationship("ExpenseEntry", back_populates="category", passive_deletes="all")


class Establishment(Base):
    """Establishment model."""

    __tablename__ = "establishments"

    code = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    phone = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    expense_entries = relationship(
        "ExpenseEntry", back_populates="establishment", passive_deletes="all"
    )


class ExpenseEntry(Base):
    """Expense entry model."""

    __tablename__ = "expense_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_date = Column(Date, nullable=False)
    payment_date = Column(Date, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(String(500), nullable=True)
    category_code = Column(
        String(50), ForeignKey("categories.code", ondelete="RESTRICT"), nullable=False, index=True
    )
    establishment_code = Column(
        String(50),
        ForeignKey("establishments.code", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="expense_entries")
    establishment = relationship("Establishment", back_populates="expense_entries")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database_engine(database_url: str) -> Engine:
    """Create an engine with the schema in place and FK enforcement on for SQLite."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    return sessionmaker(bind=create_database_engine(database_url))
