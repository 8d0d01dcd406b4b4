"""SQLAlchemy Core table definitions for the layerforge database.

Every key is an index, never a name: names are plain columns so renames
touch a single row. Ordering columns (``idx``, ``position``) preserve
creation and insertion order on reload.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

categories = Table(
    "categories",
    metadata,
    Column("idx", Integer, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False, unique=True),
    Column("skip", Boolean, nullable=False, default=False, server_default="0"),
    CheckConstraint("idx >= 0 AND idx < 256", name="ck_category_idx"),
)

variants = Table(
    "variants",
    metadata,
    Column("category_idx", Integer, ForeignKey("categories.idx"), nullable=False),
    Column("idx", Integer, nullable=False),
    Column("name", Text, nullable=False),
    Column("display_name", Text, nullable=False),
    Column("art", Text),  # inline SVG fragment
    PrimaryKeyConstraint("category_idx", "idx"),
    UniqueConstraint("category_idx", "name"),
    CheckConstraint("idx >= 0 AND idx < 256", name="ck_variant_idx"),
)

dependencies = Table(
    "dependencies",
    metadata,
    Column("position", Integer, primary_key=True, autoincrement=False),
    Column("category_idx", Integer, nullable=False),
    Column("variant_idx", Integer, nullable=False),
    UniqueConstraint("category_idx", "variant_idx"),
    ForeignKeyConstraint(["category_idx", "variant_idx"], ["variants.category_idx", "variants.idx"]),
)

dependency_members = Table(
    "dependency_members",
    metadata,
    Column("dependency_position", Integer, ForeignKey("dependencies.position"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("category_idx", Integer, nullable=False),
    Column("variant_idx", Integer, nullable=False),
    PrimaryKeyConstraint("dependency_position", "position"),
    ForeignKeyConstraint(["category_idx", "variant_idx"], ["variants.category_idx", "variants.idx"]),
)

skull_sentinels = Table(
    "skull_sentinels",
    metadata,
    Column("kind", Text, primary_key=True),  # cyclops | jawless
    Column("category_idx", Integer, nullable=False),
    Column("variant_idx", Integer, nullable=False),
)
