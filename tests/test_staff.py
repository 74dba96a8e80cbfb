import pytest
from models.order_management import OrderStatus
from models.staff import StaffRole
from schemas.order_management import OrderCreate, OrderItemCreate
from services.exceptions import InvalidCredentials, ValidationError
from jose import JWTError, jwt
from utils.config import ALGORITHM, SECRET_KEY


def test_login_issues_token(core):
    response = core.staff.authenticate("waiter", "waiter123", StaffRole.WAITER)
    assert response.success is True
    assert response.id == "waiter"
    assert response.name == "Ahmed Waiter"
    claims = jwt.decode(response.token, SECRET_KEY, algorithms=[ALGORITHM])
    assert claims["sub"] == "waiter"
    assert claims["role"] == "waiter"


@pytest.mark.parametrize("username, password, role", [
    ("waiter", "wrong", StaffRole.WAITER),
    ("nobody", "waiter123", StaffRole.WAITER),
    ("waiter", "waiter123", StaffRole.MANAGER),
])
def test_login_rejected(core, username, password, role):
    with pytest.raises(InvalidCredentials):
        core.staff.authenticate(username, password, role)


def test_login_missing_fields(core):
    with pytest.raises(ValidationError):
        core.staff.authenticate("waiter", None, StaffRole.WAITER)


def test_tampered_token_is_rejected(core):
    token = core.staff.authenticate("chef1", "chef123", StaffRole.CHEF).token
    with pytest.raises(JWTError):
        jwt.decode(token + "x", SECRET_KEY, algorithms=[ALGORITHM])


def test_waiter_stats(core):
    first = core.orders.create(OrderCreate(
        table_number=1, assigned_waiter="waiter",
        items=[OrderItemCreate(menu_item_id="1", quantity=2)],
    ))
    core.orders.create(OrderCreate(
        table_number=2, assigned_waiter="waiter",
        items=[OrderItemCreate(menu_item_id="9", quantity=1)],
    ))
    core.orders.update_status(first.id, OrderStatus.PAID)

    stats = core.waiter_stats.stats("waiter")
    assert stats.active_tables == 1
    assert stats.pending_orders == 1
    assert stats.today_revenue == 110.0
    assert stats.total_tables_served == 1


def test_stats_for_idle_waiter(core):
    stats = core.waiter_stats.stats("manager")
    assert (stats.active_tables, stats.pending_orders, stats.today_revenue, stats.total_tables_served) == (0, 0, 0.0, 0)
