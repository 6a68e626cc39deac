from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class Size(Enum):
    small = 'small'
    medium = 'medium'
    large = 'large'


class Status(Enum):
    empty = 'empty'
    occupied = 'occupied'


class Locker(BaseModel):
    id: int
    label: str
    size: Size
    status: Status


class LockerList(BaseModel):
    lockers: List[Locker]


class DeliverRequest(BaseModel):
    # Formats are checked by the core so that they surface as 400, not 422.
    recipient_phone: str = Field(validation_alias=AliasChoices("recipient_phone", "recipientPhone"))
    size: str
    recipient_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("recipient_name", "recipientName")
    )


class DeliverResponse(BaseModel):
    locker: Locker
    pickup_code: str
    instructions: str


class PickupRequest(BaseModel):
    pickup_code: str = Field(validation_alias=AliasChoices("pickup_code", "pickupCode"))


class PickupResponse(BaseModel):
    locker: Locker
    message: str
