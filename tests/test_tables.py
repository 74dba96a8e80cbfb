import pytest
from models.table_management import TableStatus
from schemas.table_management import TableCreate
from services.exceptions import DuplicateId, NotFound, ValidationError


def assert_released(table):
    assert table.status == TableStatus.AVAILABLE
    assert table.assigned_waiter is None
    assert table.current_order is None


def test_assign_occupies_table(core):
    table = core.tables.assign("table_2", "waiter")
    assert table.status == TableStatus.OCCUPIED
    assert table.assigned_waiter == "waiter"


def test_assign_unknown_table(core):
    with pytest.raises(NotFound):
        core.tables.assign("table_99", "waiter")


def test_mark_needs_assistance(core):
    core.tables.assign("table_2", "waiter")
    assert core.tables.mark_needs_assistance("table_2").status == TableStatus.NEED_ASSISTANCE
    with pytest.raises(NotFound):
        core.tables.mark_needs_assistance("missing")


def test_release_clears_links_from_any_state(core):
    core.tables.occupy(3, "order_x", "waiter")
    core.tables.mark_needs_assistance("table_3")
    assert_released(core.tables.release(3))


def test_release_unknown_table_is_ignored(core):
    assert core.tables.release(404) is None


def test_set_status_available_clears_links(core):
    core.tables.occupy(4, "order_x", "waiter")
    assert_released(core.tables.set_status("table_4", {"status": TableStatus.AVAILABLE}))


def test_set_status_partial_fields(core):
    table = core.tables.set_status("table_5", {"location": "terrace", "capacity": 3})
    assert table.location == "terrace"
    assert table.capacity == 3
    assert table.status == TableStatus.AVAILABLE


def test_set_status_rejects_order_link(core):
    with pytest.raises(ValidationError):
        core.tables.set_status("table_5", {"current_order": "order_x"})


def test_set_status_rejects_waiter_on_available_table(core):
    with pytest.raises(ValidationError):
        core.tables.set_status("table_3", {"assigned_waiter": "waiter"})
    assert_released(core.tables.get("table_3"))


def test_set_status_waiter_with_occupied_status(core):
    table = core.tables.set_status("table_3", {"status": TableStatus.OCCUPIED, "assigned_waiter": "waiter"})
    assert table.status == TableStatus.OCCUPIED
    assert table.assigned_waiter == "waiter"


def test_set_status_number_clash(core):
    with pytest.raises(DuplicateId):
        core.tables.set_status("table_5", {"number": 6})


def test_create_and_list_available(core):
    created = core.tables.create(TableCreate(tableNumber=11, capacity=4))
    assert created.id == "table_001"
    core.tables.assign("table_1", "waiter")
    available = {t.number for t in core.tables.list_available()}
    assert 11 in available
    assert 1 not in available


def test_create_duplicate_number(core):
    with pytest.raises(DuplicateId):
        core.tables.create(TableCreate(tableNumber=1, capacity=2))


def test_delete_missing(core):
    with pytest.raises(NotFound):
        core.tables.delete("missing")
