from __future__ import annotations

from datetime import datetime, timezone

import pytest

from parcelstation.core.entities.locker import LockerSize, LockerSlot, LockerStatus
from parcelstation.core.entities.placement import Placement, PlacementState
from parcelstation.core.errors import InvalidCodeError, InvalidInputError
from parcelstation.core.use_cases.assign_locker import AssignLockerUseCase
from parcelstation.core.use_cases.list_lockers import ListLockersUseCase
from parcelstation.core.use_cases.redeem_pickup_code import RedeemPickupCodeUseCase
from parcelstation.core.use_cases.seed_locker_directory import SeedLockerDirectoryUseCase
from parcelstation.infrastructure.database import Database


@pytest.fixture()
def single_locker(database: Database) -> Database:
    """A station with one small locker, B01."""
    SeedLockerDirectoryUseCase(uow=database.unit_of_work()).execute([LockerSlot("B01", LockerSize.SMALL)])
    return database


def _assign(database: Database, size: str = "small") -> str:
    use_case = AssignLockerUseCase(uow=database.unit_of_work())
    return use_case.execute(size=size, recipient_phone="13800000000").pickup_code


def _redeem(database: Database, code: object, **kwargs):
    return RedeemPickupCodeUseCase(uow=database.unit_of_work(), **kwargs).execute(pickup_code=code)


def test_single_locker_store_and_pickup_scenario(single_locker: Database) -> None:
    assign = AssignLockerUseCase(uow=single_locker.unit_of_work()).execute(
        size="small", recipient_phone="13800000000"
    )
    assert assign.locker.label == "B01"
    assert len(assign.pickup_code) == 6 and assign.pickup_code.isdigit()

    pickup = _redeem(single_locker, assign.pickup_code)
    assert pickup.locker.label == "B01"
    assert pickup.locker.id == assign.locker.id
    assert pickup.status is LockerStatus.EMPTY

    with pytest.raises(InvalidCodeError):
        _redeem(single_locker, assign.pickup_code)


def test_redeem_releases_the_locker_for_the_next_assignment(single_locker: Database) -> None:
    code = _assign(single_locker)
    [locker] = ListLockersUseCase(uow=single_locker.unit_of_work()).execute()
    assert locker.status is LockerStatus.OCCUPIED

    _redeem(single_locker, code)
    [locker] = ListLockersUseCase(uow=single_locker.unit_of_work()).execute()
    assert locker.status is LockerStatus.EMPTY

    next_code = _assign(single_locker)
    assert next_code != code


def test_never_issued_code_is_invalid(station: Database) -> None:
    issued = _assign(station)
    unknown = "100000" if issued != "100000" else "100001"

    with pytest.raises(InvalidCodeError) as exc_info:
        _redeem(station, unknown)

    assert str(exc_info.value) == "Pickup code does not exist or has already been used"


def test_unknown_and_used_codes_are_indistinguishable(single_locker: Database) -> None:
    code = _assign(single_locker)
    _redeem(single_locker, code)

    with pytest.raises(InvalidCodeError) as used:
        _redeem(single_locker, code)
    with pytest.raises(InvalidCodeError) as unknown:
        _redeem(single_locker, "999999" if code != "999999" else "999998")

    assert str(used.value) == str(unknown.value)


@pytest.mark.parametrize("code", ["12345", "1234567", "abcdef", "12 345", "", None, 123456, "１２３４５６"])
def test_malformed_code_is_rejected_as_invalid_input(station: Database, code) -> None:
    with pytest.raises(InvalidInputError):
        _redeem(station, code)


def test_redeem_records_pickup_time_and_keeps_the_placement(single_locker: Database) -> None:
    code = _assign(single_locker)
    with single_locker.unit_of_work() as uow:
        placement_id = uow.placements.find_active_by_code(code).id

    picked_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    _redeem(single_locker, code, clock=lambda: picked_at)

    with single_locker.unit_of_work() as uow:
        placement = uow.placements.get(placement_id)
        assert uow.placements.find_active_by_code(code) is None
        assert uow.placements.code_exists(code)

    assert placement.state is PlacementState.PICKED
    assert placement.pickup_code == code
    assert placement.picked_up_at is not None
    assert placement.picked_up_at.replace(tzinfo=None) == picked_at.replace(tzinfo=None)


def test_placement_transition_happens_once() -> None:
    placement = Placement(locker_id=1, recipient_phone="13800000000", pickup_code="123456")
    first = datetime(2026, 1, 1, tzinfo=timezone.utc)

    placement.mark_picked(at=first)
    assert placement.state is PlacementState.PICKED

    with pytest.raises(ValueError):
        placement.mark_picked(at=datetime(2026, 1, 2, tzinfo=timezone.utc))
    assert placement.picked_up_at == first
