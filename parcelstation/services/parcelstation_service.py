from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError

from parcelstation.core.entities.locker import DEFAULT_LOCKER_LAYOUT, Locker as CoreLocker, LockerSlot
from parcelstation.core.entities.locker import LockerStatus as CoreLockerStatus
from parcelstation.core.use_cases.assign_locker import AssignLockerUseCase
from parcelstation.core.use_cases.get_locker import GetLockerUseCase
from parcelstation.core.use_cases.list_lockers import ListLockersUseCase, LockerStatusDTO
from parcelstation.core.use_cases.redeem_pickup_code import RedeemPickupCodeUseCase
from parcelstation.core.use_cases.seed_locker_directory import SeedLockerDirectoryUseCase
from parcelstation.infrastructure.database import Database
from parcelstation.schemas.models import (
    DeliverRequest,
    DeliverResponse,
    Locker,
    LockerList,
    PickupRequest,
    PickupResponse,
)

logger = logging.getLogger(__name__)


def _max_code_attempts() -> int:
    from parcelstation.infrastructure.config import settings
    return settings.pickup_code_max_attempts


def _to_schema_locker(locker: CoreLocker, status: CoreLockerStatus) -> Locker:
    return Locker(id=locker.id, label=locker.label, size=locker.size.value, status=status.value)


def _dto_to_schema_locker(dto: LockerStatusDTO) -> Locker:
    return Locker(id=dto.id, label=dto.label, size=dto.size.value, status=dto.status.value)


def list_lockers_service(database: Database, size: str | None = None) -> LockerList:
    use_case = ListLockersUseCase(uow=database.unit_of_work())
    return LockerList(lockers=[_dto_to_schema_locker(dto) for dto in use_case.execute(size=size)])


def get_locker_service(locker_id: int, database: Database) -> Locker:
    use_case = GetLockerUseCase(uow=database.unit_of_work())
    return _dto_to_schema_locker(use_case.execute(locker_id=locker_id))


def assign_locker_service(body: DeliverRequest, database: Database) -> DeliverResponse:
    use_case = AssignLockerUseCase(uow=database.unit_of_work(), max_code_attempts=_max_code_attempts())
    result = use_case.execute(
        size=body.size,
        recipient_phone=body.recipient_phone,
        recipient_name=body.recipient_name,
    )

    return DeliverResponse(
        locker=_to_schema_locker(result.locker, result.status),
        pickup_code=result.pickup_code,
        instructions=(
            f"Locker {result.locker.label} is open, place the package inside and close the door. "
            f"Pickup code: {result.pickup_code}. Please pass it on to the recipient."
        ),
    )


def redeem_pickup_code_service(body: PickupRequest, database: Database) -> PickupResponse:
    use_case = RedeemPickupCodeUseCase(uow=database.unit_of_work())
    result = use_case.execute(pickup_code=body.pickup_code)

    return PickupResponse(
        locker=_to_schema_locker(result.locker, result.status),
        message=f"Locker {result.locker.label} is open, take your package and close the door.",
    )


def seed_locker_directory_service(
        database: Database,
        layout: Iterable[LockerSlot] = DEFAULT_LOCKER_LAYOUT,
) -> dict[str, Any]:
    """
    Create the tables if needed and seed an empty locker directory.

    Returns:
      {"created": n} where n is 0 when the directory was already seeded
    """
    database.create_all()
    use_case = SeedLockerDirectoryUseCase(uow=database.unit_of_work())
    try:
        result = use_case.execute(layout)
    except IntegrityError:
        # Another process seeded the same labels between our count and insert.
        logger.info("Locker directory was seeded concurrently, keeping existing catalog")
        return {"created": 0}
    return {"created": result.created}
