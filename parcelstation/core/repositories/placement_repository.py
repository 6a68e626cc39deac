from __future__ import annotations

from abc import ABC, abstractmethod

from parcelstation.core.entities.placement import Placement


class PlacementRepository(ABC):
    @abstractmethod
    def get(self, placement_id: int) -> Placement | None:
        raise NotImplementedError

    @abstractmethod
    def code_exists(self, pickup_code: str) -> bool:
        """True if any placement, active or historical, carries this code."""
        raise NotImplementedError

    @abstractmethod
    def add(self, placement: Placement) -> Placement:
        """Insert a new placement and return it with its id assigned."""
        raise NotImplementedError

    @abstractmethod
    def find_active_by_code(self, pickup_code: str) -> Placement | None:
        raise NotImplementedError

    @abstractmethod
    def has_active_for_locker(self, locker_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_picked(self, placement: Placement) -> bool:
        """
        Persist the stored -> picked transition.
        Returns False if the placement was no longer stored.
        """
        raise NotImplementedError
