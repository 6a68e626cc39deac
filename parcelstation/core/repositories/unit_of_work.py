from __future__ import annotations

from abc import ABC, abstractmethod

from parcelstation.core.repositories.locker_repository import LockerRepository
from parcelstation.core.repositories.placement_repository import PlacementRepository


class UnitOfWork(ABC):
    """
    One atomic, write-serialized transaction over the station store.

    Usage:
        with uow:
            ...
            uow.commit()

    Leaving the block without commit() (or through an exception) rolls back.
    """

    lockers: LockerRepository
    placements: PlacementRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError
