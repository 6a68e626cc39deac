from __future__ import annotations

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from parcelstation.core.entities.locker import Locker, LockerSize, LockerSlot, LockerStatus
from parcelstation.core.entities.placement import PlacementState
from parcelstation.core.repositories.locker_repository import LockerRepository
from parcelstation.infrastructure.models.models import LockerModel, PlacementModel


def _has_active_placement():
    """Correlated EXISTS: the enclosing LockerModel row holds a stored placement."""
    return (
        select(PlacementModel.id)
        .where(PlacementModel.locker_id == LockerModel.id)
        .where(PlacementModel.state == PlacementState.STORED)
        .exists()
    )


def _to_entity(row: LockerModel) -> Locker:
    return Locker(id=row.id, label=row.label, size=LockerSize(row.size))


class LockerRepositoryImpl(LockerRepository):
    """SQLAlchemy implementation of the locker directory."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, locker_id: int) -> Locker | None:
        row = self._db.get(LockerModel, locker_id)
        if row is None:
            return None
        return _to_entity(row)

    def list_by_size(self, size: LockerSize) -> list[Locker]:
        rows = self._db.scalars(
            select(LockerModel).where(LockerModel.size == size).order_by(LockerModel.id)
        )
        return [_to_entity(row) for row in rows]

    def list_with_status(self, size: LockerSize | None = None) -> list[tuple[Locker, LockerStatus]]:
        status = case(
            (_has_active_placement(), LockerStatus.OCCUPIED.value),
            else_=LockerStatus.EMPTY.value,
        ).label("status")

        q = select(LockerModel, status).order_by(LockerModel.id)
        if size is not None:
            q = q.where(LockerModel.size == size)

        return [(_to_entity(row), LockerStatus(value)) for row, value in self._db.execute(q).all()]

    def first_free(self, size: LockerSize) -> Locker | None:
        q = (
            select(LockerModel)
            .where(LockerModel.size == size)
            .where(~_has_active_placement())
            .order_by(LockerModel.id)
            .limit(1)
            .with_for_update()
        )
        row = self._db.scalars(q).first()
        if row is None:
            return None
        return _to_entity(row)

    def count(self) -> int:
        return int(self._db.scalar(select(func.count()).select_from(LockerModel)) or 0)

    def add(self, slot: LockerSlot) -> Locker:
        row = LockerModel(label=slot.label, size=slot.size)
        self._db.add(row)
        self._db.flush()
        return _to_entity(row)
