from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LockerSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class LockerStatus(str, Enum):
    EMPTY = "empty"
    OCCUPIED = "occupied"


@dataclass(frozen=True, slots=True)
class Locker:
    """
    A physical locker of the station. Occupancy is not part of the identity;
    it is derived from the active placements that reference the locker.
    """
    id: int
    label: str
    size: LockerSize


@dataclass(frozen=True, slots=True)
class LockerSlot:
    """One row of the station layout table used to seed the directory."""
    label: str
    size: LockerSize


DEFAULT_LOCKER_LAYOUT: tuple[LockerSlot, ...] = (
    LockerSlot("A01", LockerSize.MEDIUM),
    LockerSlot("A02", LockerSize.MEDIUM),
    LockerSlot("A03", LockerSize.MEDIUM),
    LockerSlot("A04", LockerSize.LARGE),
    LockerSlot("B01", LockerSize.SMALL),
    LockerSlot("B02", LockerSize.SMALL),
    LockerSlot("B03", LockerSize.SMALL),
    LockerSlot("B04", LockerSize.SMALL),
    LockerSlot("B05", LockerSize.SMALL),
    LockerSlot("B06", LockerSize.SMALL),
    LockerSlot("C01", LockerSize.MEDIUM),
    LockerSlot("C02", LockerSize.MEDIUM),
    LockerSlot("C03", LockerSize.MEDIUM),
    LockerSlot("C04", LockerSize.LARGE),
    LockerSlot("D01", LockerSize.SMALL),
    LockerSlot("D02", LockerSize.SMALL),
    LockerSlot("D03", LockerSize.SMALL),
    LockerSlot("D04", LockerSize.SMALL),
    LockerSlot("D05", LockerSize.SMALL),
    LockerSlot("D06", LockerSize.SMALL),
    LockerSlot("E01", LockerSize.MEDIUM),
    LockerSlot("E02", LockerSize.MEDIUM),
    LockerSlot("E03", LockerSize.MEDIUM),
    LockerSlot("E04", LockerSize.LARGE),
)
