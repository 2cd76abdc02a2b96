"""
canteen_api/db/session.py – Engine factory + Session helper.

`sqlite://` (the default) is an in-memory database; a StaticPool keeps one
shared connection so every session sees the same data.
Use db_session (contextmanager) to auto-commit/rollback/close per operation.
"""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def make_engine(database_url: str) -> Engine:
    if database_url in _MEMORY_URLS:
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=False,
        )

        # WAL mode for concurrent reads on file-backed SQLite
        @event.listens_for(engine, "connect")
        def set_wal(conn, _):
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")

        return engine

    return create_engine(database_url, pool_pre_ping=True, echo=False)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def db_session(factory: sessionmaker) -> Generator[Session, None, None]:
    """Context manager returning a Session that commits, rolls back and closes itself."""
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
