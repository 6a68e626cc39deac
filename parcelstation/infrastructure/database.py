from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

if TYPE_CHECKING:
    from parcelstation.infrastructure.unit_of_work import SqlAlchemyUnitOfWork

Base = declarative_base()


def _is_memory_sqlite(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def _create_engine(url: URL) -> Engine:
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    in_memory = _is_memory_sqlite(url)
    engine_kwargs = {"connect_args": {"check_same_thread": False}}
    if in_memory:
        engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **engine_kwargs)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        # Let SQLAlchemy emit BEGIN itself instead of pysqlite's deferred BEGIN.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        if not in_memory:
            cursor.execute("PRAGMA journal_mode = WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        # Take the write lock up front so select-then-write sequences are serialized
        # across processes sharing the file.
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


class Database:
    """
    Engine, session factory and write lock for one station store.

    Every unit of work holds `write_lock` for its whole lifetime, which serializes
    operations inside the process (and makes the single shared connection of an
    in-memory SQLite store safe to use from several threads).
    """

    def __init__(self, url: str | URL) -> None:
        self.url = make_url(url)
        self.engine = _create_engine(self.url)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.write_lock = threading.RLock()

    def create_all(self) -> None:
        # models must be imported so their tables are registered on Base.metadata
        import parcelstation.infrastructure.models.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def unit_of_work(self) -> SqlAlchemyUnitOfWork:
        from parcelstation.infrastructure.unit_of_work import SqlAlchemyUnitOfWork

        return SqlAlchemyUnitOfWork(self)

    def dispose(self) -> None:
        self.engine.dispose()


database = Database(settings.database_url)
