# app/db/migrations.py
"""
Versioned schema migrations, applied at startup before the API serves traffic.

Each migration runs in its own transaction together with the row recording it
in `schema_migrations`, so a crash mid-way leaves the schema at the last fully
applied version.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import Column, Integer, MetaData, Table, Text, func, select, text
from sqlalchemy.engine import Connection, Engine

from app.db.schema import schema_migrations

logger = logging.getLogger(__name__)


class MigrationError(RuntimeError):
    def __init__(self, version: int, description: str, cause: Exception):
        super().__init__(f"Migration {version} ({description}) failed: {cause!r}")
        self.version = version
        self.description = description


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    upgrade: Callable[[Connection], None]


def _create_product_table(conn: Connection) -> None:
    # Shape frozen as of version 1; later changes get their own migration.
    md = MetaData()
    Table(
        "Product",
        md,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", Text, nullable=True),
        Column("description", Text, nullable=True),
        Column("quantity", Integer, nullable=False, server_default=text("0")),
    )
    md.create_all(conn)


MIGRATIONS: List[Migration] = [
    Migration(1, "create Product table", _create_product_table),
]


def _applied_versions(conn: Connection) -> set:
    rows = conn.execute(select(schema_migrations.c.version)).scalars().all()
    return set(rows)


def current_version(engine: Engine) -> int:
    """
    Highest applied migration version, or 0 for an empty database.
    """
    with engine.begin() as conn:
        schema_migrations.create(conn, checkfirst=True)
        version = conn.execute(select(func.max(schema_migrations.c.version))).scalar()
    return version or 0


def apply_migrations(
    engine: Engine, migrations: Optional[List[Migration]] = None
) -> List[int]:
    """
    Apply every migration not yet recorded, in ascending version order.

    Returns the versions applied by this call (empty when already up to date).
    Raises MigrationError on the first failure; earlier migrations stay applied.
    """
    if migrations is None:
        migrations = MIGRATIONS

    try:
        with engine.begin() as conn:
            schema_migrations.create(conn, checkfirst=True)
            done = _applied_versions(conn)
    except Exception as e:
        logger.error("Could not read applied migrations: %r", e)
        raise MigrationError(0, "read schema_migrations", e) from e

    pending = sorted(
        (m for m in migrations if m.version not in done),
        key=lambda m: m.version,
    )
    if not pending:
        logger.info("Database schema is up to date (version %s)", max(done, default=0))
        return []

    applied = []
    for migration in pending:
        try:
            with engine.begin() as conn:
                migration.upgrade(conn)
                conn.execute(
                    schema_migrations.insert().values(
                        version=migration.version,
                        description=migration.description,
                        applied_at=datetime.now(timezone.utc),
                    )
                )
        except Exception as e:
            logger.error(
                "Migration %s (%s) failed: %r",
                migration.version,
                migration.description,
                e,
            )
            raise MigrationError(migration.version, migration.description, e) from e

        logger.info("Applied migration %s: %s", migration.version, migration.description)
        applied.append(migration.version)

    return applied
