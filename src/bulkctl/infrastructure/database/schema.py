"""SQLAlchemy Core table definitions for the record store."""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

records = Table(
    "records",
    metadata,
    Column("id", Text, primary_key=True),
    Column("external_id", Text, unique=True),
    Column("name", Text, nullable=False),
    Column("email", Text, unique=True),
    Column("owner", Text),
    Column("locked", Integer, default=0, server_default="0"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

Index("ix_records_owner", records.c.owner)

# Columns a caller may set through a bulk write.
WRITABLE_COLUMNS: frozenset[str] = frozenset({"external_id", "name", "email", "owner", "locked"})
