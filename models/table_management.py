from sqlalchemy import Column, Integer, String, Enum, DateTime, Date, Time
from sqlalchemy.sql import func
from utils.database import Base
import enum


class TableStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    NEED_ASSISTANCE = "need-assistance"


class ReservationStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Table(Base):
    __tablename__ = "tables"

    id = Column(String(50), primary_key=True, index=True)
    number = Column(Integer, unique=True, index=True, nullable=False)
    capacity = Column(Integer, nullable=False)
    status = Column(Enum(TableStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]), default=TableStatus.AVAILABLE)
    assigned_waiter = Column(String(50), nullable=True)
    current_order = Column(String(50), nullable=True)
    location = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(50), primary_key=True, index=True)
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(20), nullable=True)
    table_number = Column(Integer, index=True, nullable=False)
    reservation_date = Column(Date, index=True, nullable=False)
    reservation_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    number_of_guests = Column(Integer, nullable=False)
    status = Column(Enum(ReservationStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]), default=ReservationStatus.CONFIRMED)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
