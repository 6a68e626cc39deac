from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

MAX_RECIPIENT_NAME_LENGTH = 64

_RECIPIENT_PHONE_RE = re.compile(r"[0-9]{11}")


class PlacementState(str, Enum):
    STORED = "stored"
    PICKED = "picked"


@dataclass(slots=True)
class Placement:
    """
    A package stored in a locker. Created by an assignment, mutated only by a
    redemption and never deleted.
    """
    locker_id: int
    recipient_phone: str
    pickup_code: str
    recipient_name: str | None = None
    state: PlacementState = PlacementState.STORED
    created_at: datetime | None = None
    picked_up_at: datetime | None = None
    id: int | None = None

    def mark_picked(self, *, at: datetime) -> None:
        if self.state is not PlacementState.STORED:
            raise ValueError("Placement has already been picked up")
        self.state = PlacementState.PICKED
        self.picked_up_at = at


def is_valid_recipient_phone(value: object) -> bool:
    return isinstance(value, str) and _RECIPIENT_PHONE_RE.fullmatch(value) is not None
