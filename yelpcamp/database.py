"""
Database engine and session management.

The ``Database`` handle is built once per application in the lifespan
hook and stored on ``app.state``; request handlers receive sessions
through the ``get_db`` dependency.
"""
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .logging_config import db_logger

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE actions unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        self.engine: Engine = create_engine(url, **kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create tables (in production, manage the schema with migrations instead)."""
        from . import models  # noqa: F401  registers the tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)
        db_logger.info("Database tables ensured", dialect=self.engine.dialect.name)

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            db_logger.error("Database ping failed", error=e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()
        db_logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    """Return the database handle attached to the running application."""
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """Yield a session for the duration of one request."""
    db = database.session()
    try:
        yield db
    finally:
        db.close()
