"""Build the ledger store from a path, the environment, or the default location."""

import os
from pathlib import Path
from typing import Optional

from finreport.database.sqlalchemy_db import SQLAlchemyDatabase
from finreport.logging_config import get_logger

logger = get_logger(__name__)

DB_PATH_ENV_VAR = "FINREPORT_DB_PATH"
DEFAULT_DB_PATH = Path("~/.finreport/finreport.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the ledger file: explicit path, then FINREPORT_DB_PATH, then the default.

    A leading ``~`` is expanded and the parent directory is created, so a
    fresh ledger can be opened anywhere.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV_VAR) or DEFAULT_DB_PATH
    path = Path(chosen).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the SQLite ledger chosen by ``resolve_database_path``.

    Raises:
        StorageError: If the file cannot be opened or the schema created
    """
    path = resolve_database_path(database_path)
    logger.debug("Opening ledger database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
