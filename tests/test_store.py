from datetime import datetime, timezone
from decimal import Decimal
import pytest
from models.menu_management import MenuCategory
from models.table_management import TableStatus
from schemas.menu_management import MenuItemInDB
from schemas.order_management import OrderInDB, OrderItemInDB
from schemas.table_management import TableInDB
from services.exceptions import DuplicateId, ValidationError
from storage.sql import SqlStore
from utils.json_fields import decode_string_list


def test_seeded_reference_data(core):
    assert len(core.store.menu_items.list()) == 8
    assert [t.number for t in core.store.tables.list()] == list(range(1, 11))
    assert core.store.staff.get_by_username("waiter").id == "waiter"
    assert core.store.menu_items.get("1").price == Decimal("45.00")


def test_get_miss_returns_none(core):
    assert core.store.tables.get("nope") is None
    assert core.store.tables.get_by_number(99) is None
    assert core.store.bills.get_by_order("nope") is None


def test_insert_duplicate_id_raises(core):
    with pytest.raises(DuplicateId):
        core.store.tables.insert(TableInDB(id="table_1", number=42, capacity=2))


def test_update_applies_only_given_fields(core):
    updated = core.store.tables.update("table_3", {"location": "patio"})
    assert updated.location == "patio"
    assert updated.capacity == 4
    assert updated.status == TableStatus.AVAILABLE


def test_update_with_none_clears_field(core):
    core.store.tables.update("table_3", {"assigned_waiter": "waiter"})
    updated = core.store.tables.update("table_3", {"assigned_waiter": None})
    assert updated.assigned_waiter is None


def test_update_unknown_field_rejected(core):
    with pytest.raises(ValidationError):
        core.store.tables.update("table_3", {"colour": "red"})


def test_update_missing_returns_none(core):
    assert core.store.tables.update("nope", {"capacity": 3}) is None


def test_delete(core):
    assert core.store.tables.delete("table_10") is True
    assert core.store.tables.delete("table_10") is False


def test_list_filters_by_membership(core):
    core.store.tables.update("table_2", {"status": TableStatus.OCCUPIED})
    core.store.tables.update("table_4", {"status": TableStatus.RESERVED})
    found = core.store.tables.list(status=[TableStatus.OCCUPIED, TableStatus.RESERVED])
    assert {t.number for t in found} == {2, 4}


def test_reads_are_copies(core):
    table = core.store.tables.get("table_1")
    table.capacity = 99
    assert core.store.tables.get("table_1").capacity == 2


def test_order_items_persist_in_order(core):
    order = OrderInDB(
        id="o1",
        table_number=1,
        items=[
            OrderItemInDB(menu_item_id="4", quantity=1, price=Decimal("120.00")),
            OrderItemInDB(menu_item_id="1", quantity=3, price=Decimal("45.00"), notes="no mint"),
        ],
        created_at=datetime(2024, 12, 1, 12, 0, tzinfo=timezone.utc),
    )
    core.store.orders.insert(order)
    stored = core.store.orders.get("o1")
    assert [i.menu_item_id for i in stored.items] == ["4", "1"]
    assert stored.items[1].notes == "no mint"
    assert stored.created_at == order.created_at


def test_allergens_are_deduplicated(core):
    item = MenuItemInDB(
        id="x", name="Mezze", price=Decimal("10"), category=MenuCategory.APPETIZER,
        allergens=["nuts", "dairy", "nuts"],
    )
    core.store.menu_items.insert(item)
    assert core.store.menu_items.get("x").allergens == ["nuts", "dairy"]


def test_transaction_rolls_back_every_step(core):
    with pytest.raises(RuntimeError):
        with core.store.transaction():
            core.store.tables.update("table_1", {"status": TableStatus.OCCUPIED})
            core.store.tables.delete("table_2")
            raise RuntimeError("boom")
    assert core.store.tables.get("table_1").status == TableStatus.AVAILABLE
    assert core.store.tables.get("table_2") is not None


def test_reset_clears_everything(core):
    core.reset(seed=False)
    assert core.store.tables.list() == []
    assert core.store.menu_items.list() == []


def test_malformed_json_field_decodes_empty():
    assert decode_string_list("not json") == []
    assert decode_string_list(None) == []
    assert decode_string_list('["a", "b"]') == ["a", "b"]


def test_sql_store_reads_malformed_menu_json():
    store = SqlStore("sqlite://")
    try:
        store.menu_items.insert(MenuItemInDB(
            id="m", name="Tea", price=Decimal("5"), category=MenuCategory.BEVERAGE, ingredients=["tea"],
        ))
        with store.transaction():
            row = store.session.get(store.menu_items.orm_cls, "m")
            row.ingredients = "{broken"
        assert store.menu_items.get("m").ingredients == []
    finally:
        store.close()
