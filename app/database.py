import logging
from datetime import datetime, UTC

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


def utcnow():
    return datetime.now(UTC)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory for one configured store."""

    def __init__(self, url: str):
        is_sqlite = url.startswith("sqlite")
        # Only apply sqlite-specific connect_args when using sqlite
        connect_args = {"check_same_thread": False} if is_sqlite else {}

        # Enable pool_pre_ping to avoid stale connections (useful for cloud DBs like Neon)
        self.engine = create_engine(
            url,
            connect_args=connect_args,
            pool_pre_ping=True,
        )
        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        """Check connectivity and create any missing tables.

        Raises the driver error unchanged if the store is unreachable.
        """
        # register the mapped classes on Base.metadata
        from app.models import task, user  # noqa: F401

        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
