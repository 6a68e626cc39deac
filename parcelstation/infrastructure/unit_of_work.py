from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from parcelstation.core.repositories.unit_of_work import UnitOfWork
from parcelstation.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from parcelstation.infrastructure.repositories.placement_repository_impl import PlacementRepositoryImpl

if TYPE_CHECKING:
    from parcelstation.infrastructure.database import Database


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Opens a session under the database write lock on enter; closes it (rolling
    back anything uncommitted) and releases the lock on exit.
    """

    def __init__(self, database: Database) -> None:
        self._database = database
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._database.write_lock.acquire()
        try:
            self._session = self._database.session_factory()
        except Exception:
            self._database.write_lock.release()
            raise

        self.lockers = LockerRepositoryImpl(self._session)
        self.placements = PlacementRepositoryImpl(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._session is not None:
                self._session.rollback()
                self._session.close()
        finally:
            self._session = None
            self._database.write_lock.release()

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
