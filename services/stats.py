from datetime import datetime
from decimal import Decimal
from typing import Callable
from models.order_management import OrderStatus
from models.table_management import TableStatus
from schemas.staff import WaiterStats
from schemas.base import round_money
from storage.base import EntityStore
from utils.timeutils import ensure_utc

KITCHEN_QUEUE = {OrderStatus.PENDING, OrderStatus.PREPARING}


class WaiterStatistics:
    """Per-waiter counters computed from current store state."""

    def __init__(self, store: EntityStore, clock: Callable[[], datetime]):
        self.store = store
        self.clock = clock

    def stats(self, waiter_id: str) -> WaiterStats:
        orders = self.store.orders.list(assigned_waiter=waiter_id)
        active_tables = self.store.tables.list(assigned_waiter=waiter_id, status=TableStatus.OCCUPIED)
        today = ensure_utc(self.clock()).date()
        revenue = sum(
            (item.price * item.quantity
             for order in orders if order.created_at.date() == today
             for item in order.items),
            Decimal("0"),
        )
        return WaiterStats(
            active_tables=len(active_tables),
            pending_orders=sum(1 for order in orders if order.status in KITCHEN_QUEUE),
            today_revenue=float(round_money(revenue)),
            total_tables_served=sum(1 for order in orders if order.status == OrderStatus.PAID),
        )
