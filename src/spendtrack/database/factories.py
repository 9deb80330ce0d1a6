"""Database factory functions for creating storage gateways."""

import os
from pathlib import Path
from typing import Optional

from spendtrack.database.gateway import StorageGateway

MEMORY_PATH = ":memory:"


def create_sqlite_gateway(database_path: Optional[str] = None) -> StorageGateway:
    """Create a storage gateway over a SQLite database.

    Args:
        database_path: Path to SQLite database file, or ":memory:". If None,
            checks SPENDTRACK_DB_PATH environment variable, then defaults to
            ~/.spendtrack/spendtrack.db

    Returns:
        StorageGateway configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("SPENDTRACK_DB_PATH")

    if database_path is None:
        # Default to ~/.spendtrack/spendtrack.db
        home = Path.home()
        db_dir = home / ".spendtrack"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "spendtrack.db")

    if database_path == MEMORY_PATH:
        return StorageGateway("sqlite://")
    return StorageGateway(f"sqlite:///{database_path}")
