from __future__ import annotations

from datetime import datetime, timezone

from parcelstation.core.entities.locker import LockerSize
from parcelstation.core.errors import InvalidInputError


def parse_locker_size(value: object) -> LockerSize:
    """Raises InvalidInputError unless value is one of small/medium/large."""
    if isinstance(value, LockerSize):
        return value
    try:
        return LockerSize(value)
    except ValueError as e:
        raise InvalidInputError(f"Unknown locker size: {value!r}") from e


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
