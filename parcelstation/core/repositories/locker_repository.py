from __future__ import annotations

from abc import ABC, abstractmethod

from parcelstation.core.entities.locker import Locker, LockerSize, LockerSlot, LockerStatus


class LockerRepository(ABC):
    """
    Repository interface for the locker directory.
    """

    @abstractmethod
    def get(self, locker_id: int) -> Locker | None:
        """Return a single locker by id, or None if missing."""
        raise NotImplementedError

    @abstractmethod
    def list_by_size(self, size: LockerSize) -> list[Locker]:
        """Lockers of one size, ascending by id."""
        raise NotImplementedError

    @abstractmethod
    def list_with_status(self, size: LockerSize | None = None) -> list[tuple[Locker, LockerStatus]]:
        """
        Every locker (optionally of one size) in directory order, paired with its
        occupancy derived from active placements. Must be a single read.
        """
        raise NotImplementedError

    @abstractmethod
    def first_free(self, size: LockerSize) -> Locker | None:
        """Lowest-id locker of `size` with no active placement, or None."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def add(self, slot: LockerSlot) -> Locker:
        """Insert a locker. Only the seeding step calls this."""
        raise NotImplementedError
