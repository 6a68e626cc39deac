from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from parcelstation.core.errors import (
    CodeExhaustedError,
    InvalidCodeError,
    InvalidInputError,
    NoCapacityError,
    NotFoundError,
)
from parcelstation.infrastructure.database import Database
from parcelstation.schemas.models import (
    DeliverRequest,
    DeliverResponse,
    Locker,
    LockerList,
    PickupRequest,
    PickupResponse,
)
from parcelstation.services.parcelstation_service import (
    assign_locker_service,
    get_locker_service,
    list_lockers_service,
    redeem_pickup_code_service,
)

router = APIRouter()


def get_database(request: Request) -> Database:
    return request.app.state.database


@router.get("/lockers", response_model=LockerList)
def get_lockers(size: Optional[str] = None, database: Database = Depends(get_database)) -> LockerList:
    """
    List every locker with its derived status, optionally filtered by size
    """
    try:
        return list_lockers_service(database, size)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/lockers/{locker_id}", response_model=Locker)
def get_lockers_locker_id(locker_id: int, database: Database = Depends(get_database)) -> Locker:
    """
    Get a single locker
    """
    try:
        return get_locker_service(locker_id, database)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/courier/deliver", response_model=DeliverResponse)
def post_courier_deliver(body: DeliverRequest, database: Database = Depends(get_database)) -> DeliverResponse:
    """
    Store a package in the first free locker of the requested size

    Returns:
      - 200 with the locker and its pickup code
      - 400 on malformed input or when no locker of that size is free
      - 503 when no pickup code could be issued (safe to retry)
    """
    try:
        return assign_locker_service(body, database)
    except (InvalidInputError, NoCapacityError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CodeExhaustedError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/user/pickup", response_model=PickupResponse)
def post_user_pickup(body: PickupRequest, database: Database = Depends(get_database)) -> PickupResponse:
    """
    Redeem a pickup code and open its locker

    Returns:
      - 200 with the released locker
      - 400 on a malformed, unknown or already used code
    """
    try:
        return redeem_pickup_code_service(body, database)
    except (InvalidInputError, InvalidCodeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
