from __future__ import annotations

from collections.abc import Iterator

import pytest

from parcelstation.core.use_cases.seed_locker_directory import SeedLockerDirectoryUseCase
from parcelstation.infrastructure.database import Database


@pytest.fixture()
def database() -> Iterator[Database]:
    """
    A fresh in-memory store per test, with tables created but no lockers.
    """
    db = Database("sqlite+pysqlite:///:memory:")
    db.create_all()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture()
def station(database: Database) -> Database:
    """The store seeded with the default 24-locker layout."""
    SeedLockerDirectoryUseCase(uow=database.unit_of_work()).execute()
    return database
