"""Database engine construction and per-request sessions."""
from typing import Generator
import logging

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def build_engine(database_url: str) -> Engine:
    """
    Create the process-wide engine for the given URL.

    SQLite gets foreign keys and WAL journaling on every connection. An
    in-memory SQLite URL shares one connection so every session sees the
    same database.
    """
    if not database_url.startswith("sqlite"):
        logger.info("Using database at %s", database_url.split("@")[-1])
        return create_engine(database_url, echo=False, pool_pre_ping=True)

    logger.info("Using SQLite database: %s", database_url)
    connect_args = {"check_same_thread": False}
    if _is_memory_sqlite(database_url):
        engine = create_engine(
            database_url, echo=False, connect_args=connect_args, poolclass=StaticPool
        )
    else:
        engine = create_engine(database_url, echo=False, connect_args=connect_args)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def get_session(request: Request) -> Generator[Session, None, None]:
    """Dependency yielding a session bound to the application's engine."""
    with Session(request.app.state.engine) as session:
        yield session
