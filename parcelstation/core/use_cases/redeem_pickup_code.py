from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from parcelstation.core.entities.locker import Locker, LockerStatus
from parcelstation.core.entities.pickup_code import is_valid_pickup_code, mask_pickup_code
from parcelstation.core.errors import InvalidCodeError, InvalidInputError, NotFoundError
from parcelstation.core.repositories.unit_of_work import UnitOfWork
from parcelstation.core.use_cases._inputs import utcnow

logger = logging.getLogger(__name__)

_INVALID_CODE_MESSAGE = "Pickup code does not exist or has already been used"


@dataclass(frozen=True, slots=True)
class RedeemPickupCodeResult:
    """
    Use-case return type for POST /user/pickup
    """
    locker: Locker
    status: LockerStatus = LockerStatus.EMPTY


class RedeemPickupCodeUseCase:
    def __init__(self, *, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow) -> None:
        self._uow = uow
        self._clock = clock

    def execute(self, *, pickup_code: object) -> RedeemPickupCodeResult:
        if not is_valid_pickup_code(pickup_code):
            raise InvalidInputError("Pickup code must be exactly 6 digits")

        with self._uow as uow:
            placement = uow.placements.find_active_by_code(pickup_code)
            if placement is None:
                logger.warning("Rejected pickup code %s", mask_pickup_code(pickup_code))
                raise InvalidCodeError(_INVALID_CODE_MESSAGE)

            locker = uow.lockers.get(placement.locker_id)
            if locker is None:
                raise NotFoundError(f"Locker {placement.locker_id} not found")

            try:
                placement.mark_picked(at=self._clock())
            except ValueError as e:
                raise InvalidCodeError(_INVALID_CODE_MESSAGE) from e

            if not uow.placements.mark_picked(placement):
                raise InvalidCodeError(_INVALID_CODE_MESSAGE)
            uow.commit()

        logger.info("Placement %s picked up from locker %s", placement.id, locker.label)
        return RedeemPickupCodeResult(locker=locker)
