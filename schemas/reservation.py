from datetime import date, time
from pydantic import EmailStr, Field, field_serializer
from typing import Optional
from models.table_management import ReservationStatus
from schemas.base import CamelModel, UtcDateTime


class ReservationCreate(CamelModel):
    # Required-ness is checked by the reservation manager so the error is a 400
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    table_number: Optional[int] = None
    reservation_date: Optional[date] = None
    reservation_time: Optional[time] = None
    end_time: Optional[time] = None
    number_of_guests: int = 1


class ReservationStatusUpdate(CamelModel):
    status: ReservationStatus


class ReservationReschedule(CamelModel):
    reservation_date: date
    reservation_time: time
    end_time: Optional[time] = None


class ReservationInDB(CamelModel):
    id: str
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    table_number: int
    reservation_date: date
    reservation_time: time
    end_time: time
    number_of_guests: int = Field(..., ge=1)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    created_at: Optional[UtcDateTime] = None

    @field_serializer("reservation_time", "end_time", when_used="json")
    def format_time(self, value: time) -> str:
        return value.strftime("%H:%M")
