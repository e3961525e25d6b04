"""Database engine setup for SQLite with WAL mode.

SQLAlchemy Core (not ORM) is used: the store only issues simple
per-record statements inside savepoints.

pysqlite's own transaction handling breaks SAVEPOINT, so the driver is put
in autocommit mode and BEGIN is emitted from the ``begin`` event (the
recipe from the SQLAlchemy SQLite dialect docs).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from bulkctl.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path, *, echo: bool = False) -> Engine:
    """Create a SQLite engine with WAL mode and working savepoints."""
    engine = create_engine(f"sqlite:///{db_path}", echo=echo)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _do_begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN")

    return engine


def init_database(db_path: Path, *, echo: bool = False) -> Engine:
    """Create the database file and all tables at *db_path*.

    Idempotent — safe to call on an existing store.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, echo=echo)
    metadata.create_all(engine)
    return engine
