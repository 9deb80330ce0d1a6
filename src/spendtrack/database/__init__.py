"""Database layer for spendtrack."""

from spendtrack.database.gateway import ExecuteResult, StorageGateway
from spendtrack.database.factories import create_sqlite_gateway

__all__ = ["ExecuteResult", "StorageGateway", "create_sqlite_gateway"]
