import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional
from models.order_management import OrderStatus
from schemas.order_management import (
    OrderCreate,
    OrderInDB,
    OrderItemCreate,
    OrderItemInDB,
    OrderItemWithName,
    OrderWithNames,
)
from services.exceptions import NotFound, TableNotFound, TableUnavailable, ValidationError
from services.tables import TableLifecycleManager
from storage.base import EntityStore
from utils.timeutils import canonical_timestamp

logger = logging.getLogger(__name__)

# Nominal service flow; the generic status path may skip or repeat steps
NEXT_STATUSES = {
    OrderStatus.PENDING: {OrderStatus.PREPARING},
    OrderStatus.PREPARING: {OrderStatus.READY},
    OrderStatus.READY: {OrderStatus.SERVED},
    OrderStatus.SERVED: {OrderStatus.PAID, OrderStatus.COMPLETED},
    OrderStatus.PAID: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
}

# Orders in these states no longer hold their table
CLOSED_STATUSES = {OrderStatus.PAID, OrderStatus.COMPLETED}

# Items can still be added while the kitchen has not finished
OPEN_FOR_ITEMS = {OrderStatus.PENDING, OrderStatus.PREPARING}

UNKNOWN_ITEM_NAME = "Unknown Item"


class OrderLifecycleManager:
    def __init__(self, store: EntityStore, tables: TableLifecycleManager, id_generator,
                 clock: Callable[[], datetime]):
        self.store = store
        self.tables = tables
        self.new_id = id_generator
        self.clock = clock
        # Mandatory side effects on entering a status
        self.status_effects: Dict[OrderStatus, Callable[[OrderInDB], None]] = {
            OrderStatus.PAID: self._release_table,
        }

    def _release_table(self, order: OrderInDB):
        self.tables.release(order.table_number)

    def _price_items(self, items: Iterable[OrderItemCreate]) -> List[OrderItemInDB]:
        priced = []
        for item in items:
            if item.quantity is None or item.quantity <= 0:
                raise ValidationError(f"Quantity for menu item {item.menu_item_id} must be positive")
            price = item.price
            if price is None:
                menu_item = self.store.menu_items.get(item.menu_item_id)
                if not menu_item:
                    raise ValidationError(f"Menu item {item.menu_item_id} not found and no price given")
                price = menu_item.price
            if price < 0:
                raise ValidationError(f"Price for menu item {item.menu_item_id} cannot be negative")
            priced.append(OrderItemInDB(
                menu_item_id=item.menu_item_id,
                quantity=item.quantity,
                price=price,
                notes=item.notes,
            ))
        return priced

    def _valid_waiter(self, waiter_id: Optional[str]) -> Optional[str]:
        if not waiter_id:
            return None
        if not self.store.staff.get(waiter_id):
            logger.warning(f"assignedWaiter '{waiter_id}' not found in staff; leaving order unassigned")
            return None
        return waiter_id

    def create(self, request: OrderCreate) -> OrderInDB:
        if request.table_number is None:
            raise ValidationError("Missing required field: tableNumber")
        if not request.items:
            raise ValidationError("Missing required field: items")

        with self.store.transaction():
            table = self.tables.get_by_number(request.table_number)
            if not table:
                raise TableNotFound(request.table_number)
            if table.current_order:
                current = self.store.orders.get(table.current_order)
                if current and current.status not in CLOSED_STATUSES:
                    raise TableUnavailable(
                        f"Table {table.number} already has an active order {current.id}"
                    )

            items = self._price_items(request.items)
            now = self.clock()
            order = OrderInDB(
                id=self.new_id("order"),
                table_number=table.number,
                items=items,
                status=OrderStatus.PENDING,
                created_at=now,
                updated_at=now,
                assigned_waiter=self._valid_waiter(request.assigned_waiter),
                customer_name=request.customer_name,
            )
            created = self.store.orders.insert(order)
            self.tables.occupy(table.number, created.id, created.assigned_waiter)

        logger.info(f"Order {created.id} created for table {created.table_number} with {len(created.items)} items")
        return created

    def get(self, order_id: str) -> OrderInDB:
        order = self.store.orders.get(order_id)
        if not order:
            raise NotFound(f"Order {order_id} not found")
        return order

    def list(self, statuses: Optional[Iterable[OrderStatus]] = None) -> List[OrderInDB]:
        if statuses:
            return self.store.orders.list(status=set(statuses))
        return self.store.orders.list()

    def with_item_names(self, order: OrderInDB) -> OrderWithNames:
        names = {item.id: item.name for item in self.store.menu_items.list()}
        data = order.model_dump()
        data["items"] = [
            OrderItemWithName(**item.model_dump(), name=names.get(item.menu_item_id, UNKNOWN_ITEM_NAME))
            for item in order.items
        ]
        return OrderWithNames(**data)

    def update_status(self, order_id: str, status: OrderStatus, **fields) -> OrderInDB:
        """Set any status, stamp updatedAt and run the status's side effects atomically."""
        with self.store.transaction():
            order = self.get(order_id)
            if status != order.status and status not in NEXT_STATUSES[order.status]:
                logger.debug(f"Order {order_id} moving {order.status.value} -> {status.value} out of sequence")
            changes = {key: value for key, value in fields.items() if value is not None}
            changes.update(status=status, updated_at=self.clock())
            updated = self.store.orders.update(order_id, changes)
            effect = self.status_effects.get(status)
            if effect:
                effect(updated)
        logger.info(f"Order {order_id} status updated to {status.value}")
        return updated

    def accept(self, order_id: str, chef_id: Optional[str], chef_name: Optional[str],
               estimated_prep_time: Optional[int]) -> OrderInDB:
        """Kitchen takes the order: preparing, with chef and timing stamped."""
        if not estimated_prep_time or estimated_prep_time <= 0:
            raise ValidationError("Invalid estimated preparation time")
        return self.update_status(
            order_id,
            OrderStatus.PREPARING,
            assigned_chef=chef_id,
            chef_name=chef_name,
            estimated_prep_time=estimated_prep_time,
            start_time=canonical_timestamp(self.clock()),
        )

    def complete(self, order_id: str) -> OrderInDB:
        return self.update_status(order_id, OrderStatus.READY)

    def serve(self, order_id: str) -> OrderInDB:
        return self.update_status(order_id, OrderStatus.SERVED)

    def add_items(self, order_id: str, items: List[OrderItemCreate]) -> OrderInDB:
        if not items:
            raise ValidationError("No items to add")
        with self.store.transaction():
            order = self.get(order_id)
            if order.status not in OPEN_FOR_ITEMS:
                raise ValidationError(f"Cannot add items to an order that is {order.status.value}")
            priced = self._price_items(items)
            updated = self.store.orders.update(
                order_id, {"items": order.items + priced, "updated_at": self.clock()}
            )
        logger.info(f"Added {len(priced)} items to order {order_id}")
        return updated
