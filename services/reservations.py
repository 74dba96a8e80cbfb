import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from models.table_management import ReservationStatus, TableStatus
from schemas.reservation import ReservationCreate, ReservationInDB
from services.exceptions import (
    NotFound,
    ReservationConflict,
    TableNotFound,
    TableUnavailable,
    ValidationError,
)
from services.tables import TableLifecycleManager
from storage.base import EntityStore

logger = logging.getLogger(__name__)

# A reservation cannot be taken while the table is in use
BLOCKED_TABLE_STATUSES = {TableStatus.OCCUPIED, TableStatus.NEED_ASSISTANCE}


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open [start, end) intervals; touching edges do not overlap."""
    return start_a < end_b and start_b < end_a


class ReservationManager:
    def __init__(self, store: EntityStore, tables: TableLifecycleManager, id_generator, clock,
                 default_duration_minutes: int = 120):
        self.store = store
        self.tables = tables
        self.new_id = id_generator
        self.clock = clock
        self.default_duration = timedelta(minutes=default_duration_minutes)

    def derive_end_time(self, start: time) -> time:
        """Start plus the default duration, capped at the end of the day."""
        end = datetime.combine(date.min, start) + self.default_duration
        if end.date() == date.min:
            return end.time()
        last_minute = time(23, 59)
        if start >= last_minute:
            raise ValidationError(f"Reservations without an end time must start before 23:59, got {start:%H:%M}")
        return last_minute

    def find_conflicts(self, table_number: int, reservation_date: date, start: time, end: time,
                       exclude_id: Optional[str] = None) -> List[ReservationInDB]:
        """Non-cancelled reservations on the same table and date whose slot overlaps [start, end)."""
        candidates = self.store.reservations.list(table_number=table_number, reservation_date=reservation_date)
        return [
            reservation for reservation in candidates
            if reservation.status != ReservationStatus.CANCELLED
            and reservation.id != exclude_id
            and overlaps(reservation.reservation_time, reservation.end_time, start, end)
        ]

    def _validate_slot(self, reservation_date: date, start: time, end: time):
        if end <= start:
            raise ValidationError("End time must be after start time")
        now = self.clock().replace(tzinfo=None)
        if datetime.combine(reservation_date, start) < now:
            raise ValidationError("Reservation date and time cannot be in the past")

    def create(self, request: ReservationCreate) -> ReservationInDB:
        missing = [
            name for name, value in (
                ("customerName", request.customer_name),
                ("tableNumber", request.table_number),
                ("reservationDate", request.reservation_date),
                ("reservationTime", request.reservation_time),
            )
            if value in (None, "")
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if request.number_of_guests < 1:
            raise ValidationError("Number of guests must be at least 1")

        start = request.reservation_time
        end = request.end_time or self.derive_end_time(start)
        self._validate_slot(request.reservation_date, start, end)

        with self.store.transaction():
            table = self.tables.get_by_number(request.table_number)
            if not table:
                raise TableNotFound(request.table_number)
            if request.number_of_guests > table.capacity:
                raise ValidationError(
                    f"Number of guests ({request.number_of_guests}) exceeds table capacity ({table.capacity})"
                )
            if table.status in BLOCKED_TABLE_STATUSES:
                raise TableUnavailable(f"Table {table.number} is currently {table.status.value}")

            conflicts = self.find_conflicts(table.number, request.reservation_date, start, end)
            if conflicts:
                logger.warning(
                    f"Reservation for table {table.number} on {request.reservation_date} "
                    f"{start}-{end} conflicts with {[r.id for r in conflicts]}"
                )
                raise ReservationConflict(table.number, conflicts)

            reservation = ReservationInDB(
                id=self.new_id("res"),
                customer_name=request.customer_name,
                customer_email=request.customer_email,
                customer_phone=request.customer_phone,
                table_number=table.number,
                reservation_date=request.reservation_date,
                reservation_time=start,
                end_time=end,
                number_of_guests=request.number_of_guests,
                status=ReservationStatus.CONFIRMED,
                created_at=self.clock(),
            )
            created = self.store.reservations.insert(reservation)
            self.tables.reserve(table.number)

        logger.info(f"Reservation {created.id} created for table {created.table_number} on {created.reservation_date}")
        return created

    def get(self, reservation_id: str) -> ReservationInDB:
        reservation = self.store.reservations.get(reservation_id)
        if not reservation:
            raise NotFound(f"Reservation {reservation_id} not found")
        return reservation

    def list(self, table_number: Optional[int] = None, reservation_date: Optional[date] = None,
             status: Optional[ReservationStatus] = None) -> List[ReservationInDB]:
        filters = {}
        if table_number is not None:
            filters["table_number"] = table_number
        if reservation_date is not None:
            filters["reservation_date"] = reservation_date
        if status is not None:
            filters["status"] = status
        return self.store.reservations.list(**filters)

    def update_status(self, reservation_id: str, status: ReservationStatus) -> ReservationInDB:
        # Plain field update; table status is left alone
        updated = self.store.reservations.update(reservation_id, {"status": status})
        if not updated:
            raise NotFound(f"Reservation {reservation_id} not found")
        logger.info(f"Reservation {reservation_id} status set to {status.value}")
        return updated

    def confirm(self, reservation_id: str) -> ReservationInDB:
        return self.update_status(reservation_id, ReservationStatus.CONFIRMED)

    def cancel(self, reservation_id: str) -> ReservationInDB:
        return self.update_status(reservation_id, ReservationStatus.CANCELLED)

    def reschedule(self, reservation_id: str, reservation_date: date, start: time,
                   end: Optional[time] = None) -> ReservationInDB:
        end = end or self.derive_end_time(start)
        self._validate_slot(reservation_date, start, end)
        with self.store.transaction():
            reservation = self.get(reservation_id)
            if reservation.status == ReservationStatus.CANCELLED:
                raise ValidationError("Cancelled reservations cannot be rescheduled")
            conflicts = self.find_conflicts(
                reservation.table_number, reservation_date, start, end, exclude_id=reservation_id
            )
            if conflicts:
                raise ReservationConflict(reservation.table_number, conflicts)
            updated = self.store.reservations.update(
                reservation_id,
                {"reservation_date": reservation_date, "reservation_time": start, "end_time": end},
            )
        logger.info(f"Reservation {reservation_id} moved to {reservation_date} {start}-{end}")
        return updated
