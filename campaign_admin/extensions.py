from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

db = SQLAlchemy()

# Only enable PRAGMA on SQLite connections
try:
    from sqlite3 import Connection as SQLite3Connection
except ImportError:
    SQLite3Connection = None


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    if SQLite3Connection and isinstance(dbapi_connection, SQLite3Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in created_at/updated_at."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def init_database() -> None:
    """Create any missing tables. Must run inside an application context."""
    # Import models so they are registered on db.metadata
    from . import models  # noqa: F401

    db.create_all()
    logger.info(
        "Database initialized with %d tables: %s",
        len(db.metadata.tables),
        ", ".join(db.metadata.tables.keys()),
    )
