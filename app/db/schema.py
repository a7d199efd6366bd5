# app/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, Text, DateTime, text
)

metadata = MetaData()

products = Table(
    "Product",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=True),
    Column("description", Text, nullable=True),
    Column("quantity", Integer, nullable=False, server_default=text("0")),
)

# Bookkeeping for app.db.migrations; kept out of `metadata` so that migrations
# stay the only thing that creates application tables.
migrations_metadata = MetaData()

schema_migrations = Table(
    "schema_migrations",
    migrations_metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("description", Text, nullable=False),
    Column("applied_at", DateTime(timezone=True), nullable=False),
)
