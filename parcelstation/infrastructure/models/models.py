from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from parcelstation.core.entities.locker import LockerSize
from parcelstation.core.entities.placement import MAX_RECIPIENT_NAME_LENGTH, PlacementState
from parcelstation.infrastructure.database import Base

ACTIVE_PLACEMENT_INDEX = "uq_placements_active_locker"
PICKUP_CODE_CONSTRAINT = "uq_placements_pickup_code"


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class LockerModel(Base):
    __tablename__ = "lockers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    size: Mapped[LockerSize] = mapped_column(
        Enum(LockerSize, name="locker_size", values_callable=_enum_values, create_constraint=True),
        nullable=False,
        index=True,
    )


class PlacementModel(Base):
    __tablename__ = "placements"
    __table_args__ = (
        UniqueConstraint("pickup_code", name=PICKUP_CODE_CONSTRAINT),
        # at most one stored placement per locker
        Index(
            ACTIVE_PLACEMENT_INDEX,
            "locker_id",
            unique=True,
            sqlite_where=text("state = 'stored'"),
            postgresql_where=text("state = 'stored'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    locker_id: Mapped[int] = mapped_column(ForeignKey("lockers.id"), nullable=False)
    recipient_name: Mapped[str | None] = mapped_column(String(MAX_RECIPIENT_NAME_LENGTH), nullable=True)
    recipient_phone: Mapped[str] = mapped_column(String(11), nullable=False)
    pickup_code: Mapped[str] = mapped_column(String(6), nullable=False)
    state: Mapped[PlacementState] = mapped_column(
        Enum(PlacementState, name="placement_state", values_callable=_enum_values, create_constraint=True),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    picked_up_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
