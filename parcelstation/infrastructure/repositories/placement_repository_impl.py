from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from parcelstation.core.entities.placement import Placement, PlacementState
from parcelstation.core.errors import CodeExhaustedError, LockerStationError, NoCapacityError
from parcelstation.core.repositories.placement_repository import PlacementRepository
from parcelstation.infrastructure.models.models import (
    PICKUP_CODE_CONSTRAINT,
    PlacementModel,
)


def _to_entity(row: PlacementModel) -> Placement:
    return Placement(
        id=row.id,
        locker_id=row.locker_id,
        recipient_name=row.recipient_name,
        recipient_phone=row.recipient_phone,
        pickup_code=row.pickup_code,
        state=PlacementState(row.state),
        created_at=row.created_at,
        picked_up_at=row.picked_up_at,
    )


def _translate_integrity_error(error: IntegrityError) -> LockerStationError:
    """
    Map a constraint violation on insert to the domain error the caller would
    have seen had the conflicting transaction committed first.
    """
    message = str(error.orig)
    if "pickup_code" in message or PICKUP_CODE_CONSTRAINT in message:
        return CodeExhaustedError("Pickup code collided with a concurrent placement, try again")
    return NoCapacityError("Locker was taken by a concurrent placement, try again")


class PlacementRepositoryImpl(PlacementRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, placement_id: int) -> Placement | None:
        row = self._db.get(PlacementModel, placement_id)
        if row is None:
            return None
        return _to_entity(row)

    def code_exists(self, pickup_code: str) -> bool:
        q = select(PlacementModel.id).where(PlacementModel.pickup_code == pickup_code).limit(1)
        return self._db.scalar(q) is not None

    def add(self, placement: Placement) -> Placement:
        row = PlacementModel(
            locker_id=placement.locker_id,
            recipient_name=placement.recipient_name,
            recipient_phone=placement.recipient_phone,
            pickup_code=placement.pickup_code,
            state=placement.state,
            created_at=placement.created_at,
            picked_up_at=placement.picked_up_at,
        )
        self._db.add(row)
        try:
            self._db.flush()
        except IntegrityError as e:
            raise _translate_integrity_error(e) from e

        placement.id = row.id
        return placement

    def find_active_by_code(self, pickup_code: str) -> Placement | None:
        q = (
            select(PlacementModel)
            .where(PlacementModel.pickup_code == pickup_code)
            .where(PlacementModel.state == PlacementState.STORED)
            .limit(1)
            .with_for_update()
        )
        row = self._db.scalars(q).first()
        if row is None:
            return None
        return _to_entity(row)

    def has_active_for_locker(self, locker_id: int) -> bool:
        q = (
            select(PlacementModel.id)
            .where(PlacementModel.locker_id == locker_id)
            .where(PlacementModel.state == PlacementState.STORED)
            .limit(1)
        )
        return self._db.scalar(q) is not None

    def mark_picked(self, placement: Placement) -> bool:
        # Guarded on the stored state so a lost race updates nothing.
        result = self._db.execute(
            update(PlacementModel)
            .where(PlacementModel.id == placement.id)
            .where(PlacementModel.state == PlacementState.STORED)
            .values(state=placement.state, picked_up_at=placement.picked_up_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
