from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from parcelstation.core.entities.locker import DEFAULT_LOCKER_LAYOUT, LockerSlot
from parcelstation.core.repositories.unit_of_work import UnitOfWork
from parcelstation.core.use_cases.locker_directory import LockerDirectory


@dataclass(frozen=True, slots=True)
class SeedDirectoryResult:
    created: int


class SeedLockerDirectoryUseCase:
    def __init__(self, *, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, layout: Iterable[LockerSlot] = DEFAULT_LOCKER_LAYOUT) -> SeedDirectoryResult:
        with self._uow as uow:
            created = LockerDirectory(locker_repo=uow.lockers).seed(layout)
            uow.commit()
        return SeedDirectoryResult(created=created)
