from datetime import date, time
import pytest
from models.table_management import ReservationStatus, TableStatus
from schemas.reservation import ReservationCreate
from services.exceptions import (
    ReservationConflict,
    TableNotFound,
    TableUnavailable,
    ValidationError,
)
from services.reservations import overlaps

NEW_YEARS_EVE = date(2024, 12, 31)


def booking(start, end=None, table=2, guests=2, day=NEW_YEARS_EVE, name="Layla"):
    return ReservationCreate(
        customer_name=name,
        customer_email="layla@example.com",
        table_number=table,
        reservation_date=day,
        reservation_time=start,
        end_time=end,
        number_of_guests=guests,
    )


def test_create_confirms_and_reserves_table(core):
    reservation = core.reservations.create(booking(time(19, 0), time(20, 0)))
    assert reservation.id == "res_001"
    assert reservation.status == ReservationStatus.CONFIRMED
    assert core.tables.get_by_number(2).status == TableStatus.RESERVED


def test_overlapping_slot_conflicts_and_adjacent_slot_succeeds(core):
    core.reservations.create(booking(time(19, 0), time(20, 0)))

    with pytest.raises(ReservationConflict) as excinfo:
        core.reservations.create(booking(time(19, 30), time(20, 30)))
    assert "already reserved" in excinfo.value.message
    assert isinstance(excinfo.value, TableUnavailable)

    later = core.reservations.create(booking(time(20, 0), time(21, 0)))
    assert later.status == ReservationStatus.CONFIRMED
    assert len(core.reservations.list(table_number=2)) == 2


def test_end_time_defaults_to_two_hours(core):
    reservation = core.reservations.create(booking(time(18, 0)))
    assert reservation.end_time == time(20, 0)


def test_late_start_end_time_capped(core):
    assert core.reservations.derive_end_time(time(23, 0)) == time(23, 59)


def test_last_minute_start_needs_end_time(core):
    with pytest.raises(ValidationError) as excinfo:
        core.reservations.create(booking(time(23, 59)))
    assert "must start before 23:59" in excinfo.value.message
    assert core.reservations.list(table_number=2) == []
    assert core.reservations.create(booking(time(23, 58))).end_time == time(23, 59)


def test_missing_fields(core):
    with pytest.raises(ValidationError):
        core.reservations.create(ReservationCreate(table_number=2, reservation_date=NEW_YEARS_EVE))


def test_end_before_start(core):
    with pytest.raises(ValidationError):
        core.reservations.create(booking(time(20, 0), time(19, 0)))


def test_past_slot_rejected(core):
    with pytest.raises(ValidationError):
        core.reservations.create(booking(time(19, 0), day=date(2024, 11, 30)))


def test_guest_count_bounds(core):
    with pytest.raises(ValidationError):
        core.reservations.create(booking(time(19, 0), guests=0))
    with pytest.raises(ValidationError):
        core.reservations.create(booking(time(19, 0), guests=5))


def test_unknown_table(core):
    with pytest.raises(TableNotFound):
        core.reservations.create(booking(time(19, 0), table=42))


def test_occupied_table_unavailable(core):
    core.tables.assign("table_2", "waiter")
    with pytest.raises(TableUnavailable):
        core.reservations.create(booking(time(19, 0)))


def test_find_conflicts_skips_cancelled_and_other_tables(core):
    first = core.reservations.create(booking(time(19, 0), time(20, 0)))
    core.reservations.create(booking(time(19, 0), time(20, 0), table=3))
    found = core.reservations.find_conflicts(2, NEW_YEARS_EVE, time(19, 30), time(19, 45))
    assert [r.id for r in found] == [first.id]

    core.reservations.cancel(first.id)
    assert core.reservations.find_conflicts(2, NEW_YEARS_EVE, time(19, 30), time(19, 45)) == []


def test_find_conflicts_other_date(core):
    core.reservations.create(booking(time(19, 0), time(20, 0)))
    assert core.reservations.find_conflicts(2, date(2025, 1, 1), time(19, 0), time(20, 0)) == []


def test_cancel_leaves_table_status(core):
    reservation = core.reservations.create(booking(time(19, 0), time(20, 0)))
    cancelled = core.reservations.cancel(reservation.id)
    assert cancelled.status == ReservationStatus.CANCELLED
    assert core.tables.get_by_number(2).status == TableStatus.RESERVED


def test_reschedule_ignores_itself(core):
    reservation = core.reservations.create(booking(time(19, 0), time(20, 0)))
    moved = core.reservations.reschedule(reservation.id, NEW_YEARS_EVE, time(19, 30), time(20, 30))
    assert moved.reservation_time == time(19, 30)


def test_reschedule_into_conflict(core):
    core.reservations.create(booking(time(19, 0), time(20, 0)))
    other = core.reservations.create(booking(time(21, 0), time(22, 0)))
    with pytest.raises(ReservationConflict):
        core.reservations.reschedule(other.id, NEW_YEARS_EVE, time(19, 30), time(20, 30))


@pytest.mark.parametrize("a, b, expected", [
    ((time(19), time(20)), (time(19, 30), time(20, 30)), True),
    ((time(19), time(20)), (time(20), time(21)), False),
    ((time(19), time(22)), (time(20), time(21)), True),
    ((time(19), time(20)), (time(17), time(19)), False),
])
def test_overlaps(a, b, expected):
    assert overlaps(*a, *b) is expected
