"""Storage gateway: parameterized statements against the relational store."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable

from spendtrack.database.models import Base, create_session_factory

logger = logging.getLogger(__name__)

Statement = str | Executable


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a write statement."""

    affected: int
    generated_key: Optional[int]


class StorageGateway:
    """Thin SQLAlchemy-backed gateway exposing execute/query_one/query_all.

    Statements are either SQL strings with named parameters (``:code``) or
    SQLAlchemy Core constructs. Every execute() is its own transaction:
    committed on success, rolled back on failure. Errors raised by the
    engine, including foreign-key violations, are re-raised unchanged.
    """

    def __init__(self, database_url: str):
        """Initialize the gateway.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db',
                'sqlite://' for an in-memory store)
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.session_factory.kw["bind"])

    @staticmethod
    def _prepare(statement: Statement) -> Executable:
        if isinstance(statement, str):
            return text(statement)
        return statement

    def execute(self, statement: Statement, params: Optional[dict[str, Any]] = None) -> ExecuteResult:
        """Run a write statement and commit it.

        Returns:
            ExecuteResult with the affected row count and the storage-generated
            row id of the last insert (None when the driver reports none)
        """
        session = self._get_session()
        logger.debug("execute: %s %s", statement, params or {})
        try:
            result = session.execute(self._prepare(statement), params or {})
            affected = result.rowcount
            generated_key = getattr(result, "lastrowid", None)
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
        return ExecuteResult(affected=affected, generated_key=generated_key)

    def query_one(self, statement: Statement, params: Optional[dict[str, Any]] = None) -> Optional[dict[str, Any]]:
        """Return the first row as a dict, or None when there is none."""
        session = self._get_session()
        logger.debug("query_one: %s %s", statement, params or {})
        try:
            row = session.execute(self._prepare(statement), params or {}).mappings().first()
        except SQLAlchemyError:
            session.rollback()
            raise
        return dict(row) if row is not None else None

    def query_all(self, statement: Statement, params: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        """Return every row as a list of dicts (empty list when there are none)."""
        session = self._get_session()
        logger.debug("query_all: %s %s", statement, params or {})
        try:
            rows = session.execute(self._prepare(statement), params or {}).mappings().all()
        except SQLAlchemyError:
            session.rollback()
            raise
        return [dict(row) for row in rows]
