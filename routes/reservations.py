from datetime import date, time
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from models.table_management import ReservationStatus
from schemas.reservation import (
    ReservationCreate,
    ReservationInDB,
    ReservationReschedule,
    ReservationStatusUpdate,
)
from services.core import RestaurantCore
from utils.dependencies import get_core
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reservations", tags=["reservations"])


@router.get("", response_model=List[ReservationInDB])
async def list_reservations(
    table_number: Optional[int] = Query(None, alias="tableNumber"),
    reservation_date: Optional[date] = Query(None, alias="date"),
    reservation_status: Optional[ReservationStatus] = Query(None, alias="status"),
    core: RestaurantCore = Depends(get_core)
):
    return core.reservations.list(
        table_number=table_number, reservation_date=reservation_date, status=reservation_status
    )


@router.post("", response_model=ReservationInDB, status_code=status.HTTP_201_CREATED)
async def create_reservation(reservation: ReservationCreate, core: RestaurantCore = Depends(get_core)):
    logger.debug(f"Reservation request: {reservation.model_dump()}")
    return core.reservations.create(reservation)


@router.get("/conflicts", response_model=List[ReservationInDB])
async def find_reservation_conflicts(
    table_number: int = Query(..., alias="tableNumber"),
    reservation_date: date = Query(..., alias="date"),
    start_time: time = Query(..., alias="startTime"),
    end_time: Optional[time] = Query(None, alias="endTime"),
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    core: RestaurantCore = Depends(get_core)
):
    end_time = end_time or core.reservations.derive_end_time(start_time)
    return core.reservations.find_conflicts(table_number, reservation_date, start_time, end_time, exclude_id)


@router.get("/{reservation_id}", response_model=ReservationInDB)
async def get_reservation(reservation_id: str, core: RestaurantCore = Depends(get_core)):
    return core.reservations.get(reservation_id)


@router.post("/{reservation_id}/confirm", response_model=ReservationInDB)
async def confirm_reservation(reservation_id: str, core: RestaurantCore = Depends(get_core)):
    return core.reservations.confirm(reservation_id)


@router.post("/{reservation_id}/cancel", response_model=ReservationInDB)
async def cancel_reservation(reservation_id: str, core: RestaurantCore = Depends(get_core)):
    return core.reservations.cancel(reservation_id)


@router.put("/{reservation_id}/status", response_model=ReservationInDB)
async def update_reservation_status(
    reservation_id: str,
    status_update: ReservationStatusUpdate,
    core: RestaurantCore = Depends(get_core)
):
    return core.reservations.update_status(reservation_id, status_update.status)


@router.put("/{reservation_id}/reschedule", response_model=ReservationInDB)
async def reschedule_reservation(
    reservation_id: str,
    reschedule: ReservationReschedule,
    core: RestaurantCore = Depends(get_core)
):
    return core.reservations.reschedule(
        reservation_id, reschedule.reservation_date, reschedule.reservation_time, reschedule.end_time
    )
