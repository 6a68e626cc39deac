from __future__ import annotations

from parcelstation.core.entities.locker import LockerStatus
from parcelstation.core.repositories.unit_of_work import UnitOfWork
from parcelstation.core.use_cases.list_lockers import LockerStatusDTO
from parcelstation.core.use_cases.locker_directory import LockerDirectory


class GetLockerUseCase:
    def __init__(self, *, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, *, locker_id: int) -> LockerStatusDTO:
        with self._uow as uow:
            locker = LockerDirectory(locker_repo=uow.lockers).get_by_id(locker_id)
            occupied = uow.placements.has_active_for_locker(locker.id)

        return LockerStatusDTO(
            id=locker.id,
            label=locker.label,
            size=locker.size,
            status=LockerStatus.OCCUPIED if occupied else LockerStatus.EMPTY,
        )
