from __future__ import annotations

import logging
from collections.abc import Iterable

from parcelstation.core.entities.locker import Locker, LockerSize, LockerSlot
from parcelstation.core.errors import NotFoundError
from parcelstation.core.repositories.locker_repository import LockerRepository

logger = logging.getLogger(__name__)


class LockerDirectory:
    """
    Fixed catalog of the station's physical lockers.

    The only write path is `seed`, which fills an empty catalog from a layout
    table. It must run inside a write-serialized transaction so that two
    first-run initializations cannot both see an empty catalog.
    """

    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def list_by_size(self, size: LockerSize) -> list[Locker]:
        return self._locker_repo.list_by_size(size)

    def get_by_id(self, locker_id: int) -> Locker:
        locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError(f"Locker {locker_id} not found")
        return locker

    def seed(self, layout: Iterable[LockerSlot]) -> int:
        """Returns the number of lockers created (0 if already seeded)."""
        if self._locker_repo.count() > 0:
            return 0

        created = 0
        for slot in layout:
            self._locker_repo.add(slot)
            created += 1
        logger.info("Seeded locker directory with %d lockers", created)
        return created
