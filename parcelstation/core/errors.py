from __future__ import annotations


class LockerStationError(Exception):
    """Base class for every failure raised by the station core."""


class InvalidInputError(LockerStationError):
    """Malformed size, phone number or pickup code. Raise to map to HTTP 400."""


class NoCapacityError(LockerStationError):
    """No free locker of the requested size. Raise to map to HTTP 400."""


class CodeExhaustedError(LockerStationError):
    """
    Could not mint a collision-free pickup code within the attempt budget.
    Transient: the whole operation is safe to retry. Raise to map to HTTP 503.
    """


class InvalidCodeError(LockerStationError):
    """
    Unknown or already redeemed pickup code. Both causes share one error so a
    caller cannot tell which codes were ever issued. Raise to map to HTTP 400.
    """


class NotFoundError(LockerStationError):
    """Raise to map to HTTP 404."""
