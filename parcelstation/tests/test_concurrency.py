from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from parcelstation.core.entities.locker import LockerSize, LockerSlot, LockerStatus
from parcelstation.core.errors import InvalidCodeError, NoCapacityError
from parcelstation.core.use_cases.assign_locker import AssignLockerUseCase
from parcelstation.core.use_cases.list_lockers import ListLockersUseCase
from parcelstation.core.use_cases.redeem_pickup_code import RedeemPickupCodeUseCase
from parcelstation.core.use_cases.seed_locker_directory import SeedLockerDirectoryUseCase
from parcelstation.infrastructure.database import Database


def _race(workers: int, action: Callable[[], object]) -> list[object]:
    """
    Run `action` on `workers` threads released together.
    Returns each outcome: the result, or the exception raised.
    """
    barrier = threading.Barrier(workers)

    def _run() -> object:
        barrier.wait()
        try:
            return action()
        except Exception as e:  # collected for assertions
            return e

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_run) for _ in range(workers)]
        return [f.result() for f in futures]


def test_concurrent_assignments_for_one_free_locker_yield_exactly_one_success(database: Database) -> None:
    SeedLockerDirectoryUseCase(uow=database.unit_of_work()).execute(
        [LockerSlot("B01", LockerSize.SMALL), LockerSlot("A04", LockerSize.LARGE)]
    )

    outcomes = _race(
        8,
        lambda: AssignLockerUseCase(uow=database.unit_of_work()).execute(
            size="small", recipient_phone="13800000000"
        ),
    )

    successes = [o for o in outcomes if not isinstance(o, Exception)]
    failures = [o for o in outcomes if isinstance(o, Exception)]
    assert len(successes) == 1
    assert successes[0].locker.label == "B01"
    assert len(failures) == 7
    assert all(isinstance(f, NoCapacityError) for f in failures)

    with database.unit_of_work() as uow:
        assert uow.placements.has_active_for_locker(successes[0].locker.id)


def test_concurrent_assignments_get_distinct_lockers_and_codes(station: Database) -> None:
    outcomes = _race(
        12,
        lambda: AssignLockerUseCase(uow=station.unit_of_work()).execute(
            size="small", recipient_phone="13800000000"
        ),
    )

    assert not [o for o in outcomes if isinstance(o, Exception)]
    assert len({o.locker.id for o in outcomes}) == 12
    assert len({o.pickup_code for o in outcomes}) == 12

    smalls = ListLockersUseCase(uow=station.unit_of_work()).execute(size="small")
    assert {l.status for l in smalls} == {LockerStatus.OCCUPIED}


def test_concurrent_redemptions_of_one_code_release_the_locker_once(station: Database) -> None:
    code = AssignLockerUseCase(uow=station.unit_of_work()).execute(
        size="medium", recipient_phone="13800000000"
    ).pickup_code

    outcomes = _race(6, lambda: RedeemPickupCodeUseCase(uow=station.unit_of_work()).execute(pickup_code=code))

    successes = [o for o in outcomes if not isinstance(o, Exception)]
    failures = [o for o in outcomes if isinstance(o, Exception)]
    assert len(successes) == 1
    assert len(failures) == 5
    assert all(isinstance(f, InvalidCodeError) for f in failures)
