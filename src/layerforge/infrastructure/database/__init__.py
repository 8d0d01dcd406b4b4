"""SQLite database engine, schema, and snapshot I/O via SQLAlchemy Core."""

from layerforge.infrastructure.database.engine import (
    create_db_engine,
    database_path,
    init_database,
)
from layerforge.infrastructure.database.schema import (
    categories,
    dependencies,
    dependency_members,
    metadata,
    skull_sentinels,
    variants,
)
from layerforge.infrastructure.database.snapshot import read_snapshot, write_snapshot

__all__ = [
    "categories",
    "create_db_engine",
    "database_path",
    "dependencies",
    "dependency_members",
    "init_database",
    "metadata",
    "read_snapshot",
    "skull_sentinels",
    "variants",
    "write_snapshot",
]
