from __future__ import annotations

from dataclasses import dataclass

from parcelstation.core.entities.locker import LockerSize, LockerStatus
from parcelstation.core.repositories.unit_of_work import UnitOfWork
from parcelstation.core.use_cases._inputs import parse_locker_size


@dataclass(frozen=True, slots=True)
class LockerStatusDTO:
    """
    Use-case return type for GET /lockers
    """
    id: int
    label: str
    size: LockerSize
    status: LockerStatus


class ListLockersUseCase:
    def __init__(self, *, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, *, size: object | None = None) -> list[LockerStatusDTO]:
        locker_size = parse_locker_size(size) if size is not None else None

        with self._uow as uow:
            rows = uow.lockers.list_with_status(locker_size)

        return [
            LockerStatusDTO(id=locker.id, label=locker.label, size=locker.size, status=status)
            for locker, status in rows
        ]
