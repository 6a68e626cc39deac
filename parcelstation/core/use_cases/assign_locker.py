from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from parcelstation.core.entities.locker import Locker, LockerStatus
from parcelstation.core.entities.pickup_code import generate_pickup_code, mask_pickup_code
from parcelstation.core.entities.placement import (
    MAX_RECIPIENT_NAME_LENGTH,
    Placement,
    is_valid_recipient_phone,
)
from parcelstation.core.errors import CodeExhaustedError, InvalidInputError, NoCapacityError
from parcelstation.core.repositories.placement_repository import PlacementRepository
from parcelstation.core.repositories.unit_of_work import UnitOfWork
from parcelstation.core.use_cases._inputs import parse_locker_size, utcnow

logger = logging.getLogger(__name__)

DEFAULT_MAX_CODE_ATTEMPTS = 10


@dataclass(frozen=True, slots=True)
class AssignLockerResult:
    """
    Use-case return type for POST /courier/deliver
    """
    locker: Locker
    pickup_code: str
    status: LockerStatus = LockerStatus.OCCUPIED


class AssignLockerUseCase:
    """
    Stores a package: picks the lowest-id free locker of the requested size,
    mints a pickup code unused by any placement ever created, and records the
    placement. Everything happens in one unit of work.
    """

    def __init__(
            self,
            *,
            uow: UnitOfWork,
            code_generator: Callable[[], str] = generate_pickup_code,
            max_code_attempts: int = DEFAULT_MAX_CODE_ATTEMPTS,
            clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if max_code_attempts < 1:
            raise ValueError("max_code_attempts must be at least 1")
        self._uow = uow
        self._code_generator = code_generator
        self._max_code_attempts = max_code_attempts
        self._clock = clock

    def execute(self, *, size: object, recipient_phone: object, recipient_name: str | None = None) -> AssignLockerResult:
        locker_size = parse_locker_size(size)
        if not is_valid_recipient_phone(recipient_phone):
            raise InvalidInputError("Recipient phone must be exactly 11 digits")
        name = recipient_name.strip() if isinstance(recipient_name, str) else None
        if name and len(name) > MAX_RECIPIENT_NAME_LENGTH:
            raise InvalidInputError(f"Recipient name must be at most {MAX_RECIPIENT_NAME_LENGTH} characters")

        with self._uow as uow:
            locker = uow.lockers.first_free(locker_size)
            if locker is None:
                logger.warning("No free %s locker left", locker_size.value)
                raise NoCapacityError(f"All {locker_size.value} lockers are in use, choose another size")

            pickup_code = self._mint_pickup_code(uow.placements)
            placement = uow.placements.add(
                Placement(
                    locker_id=locker.id,
                    recipient_name=name or None,
                    recipient_phone=recipient_phone,
                    pickup_code=pickup_code,
                    created_at=self._clock(),
                )
            )
            uow.commit()

        logger.info(
            "Placement %s stored in locker %s (code %s)",
            placement.id,
            locker.label,
            mask_pickup_code(pickup_code),
        )
        return AssignLockerResult(locker=locker, pickup_code=pickup_code)

    def _mint_pickup_code(self, placements: PlacementRepository) -> str:
        for _ in range(self._max_code_attempts):
            candidate = self._code_generator()
            if not placements.code_exists(candidate):
                return candidate

        logger.error("Pickup code generation exhausted after %d attempts", self._max_code_attempts)
        raise CodeExhaustedError("The station is busy and could not issue a pickup code, try again")
