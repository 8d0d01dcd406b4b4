"""SQLite engine for the persisted registry snapshot.

The database lives at ``{root}/.layerforge/layerforge.db``. SQLAlchemy Core
is enough here: the store reads and rewrites the whole snapshot, so there
is nothing for an ORM session or identity map to track.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from layerforge.infrastructure.database.schema import metadata

DATA_DIR = ".layerforge"
DB_FILENAME = "layerforge.db"

# Applied to every new DBAPI connection.
_PRAGMAS = (
    "journal_mode=WAL",
    "foreign_keys=ON",
    "synchronous=NORMAL",
)


def database_path(root: Path) -> Path:
    return root / DATA_DIR / DB_FILENAME


def create_db_engine(db_path: Path) -> Engine:
    """Return an engine for *db_path* with the registry pragmas installed."""
    engine = create_engine(f"sqlite:///{db_path}")

    @event.listens_for(engine, "connect")
    def _apply_pragmas(dbapi_conn: Any, _record: Any) -> None:
        cursor = dbapi_conn.cursor()
        try:
            for pragma in _PRAGMAS:
                cursor.execute(f"PRAGMA {pragma}")
        finally:
            cursor.close()

    return engine


def init_database(root: Path) -> Engine:
    """Create (if needed) and open the registry database under *root*.

    Safe to call on an existing registry; tables are only created when
    missing.
    """
    path = database_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(path)
    metadata.create_all(engine)
    return engine
