import logging
from typing import Any, Dict, List, Optional
from models.table_management import TableStatus
from schemas.table_management import TableCreate, TableInDB
from services.exceptions import DuplicateId, NotFound, ValidationError
from storage.base import EntityStore

logger = logging.getLogger(__name__)

# Fields an administrative caller may touch through set_status
ADMIN_FIELDS = {"status", "assigned_waiter", "capacity", "location", "number"}

RELEASED_FIELDS = {"status": TableStatus.AVAILABLE, "assigned_waiter": None, "current_order": None}


class TableLifecycleManager:
    """Owns table status transitions and the waiter/order links on a table.

    available -> reserved                         reservation created
    available|reserved -> occupied                waiter assigned or order created
    occupied -> need-assistance                   explicit assist call
    need-assistance|occupied|reserved -> available  order paid (release)
    """

    def __init__(self, store: EntityStore, id_generator):
        self.store = store
        self.new_id = id_generator

    def get(self, table_id: str) -> TableInDB:
        table = self.store.tables.get(table_id)
        if not table:
            raise NotFound(f"Table {table_id} not found")
        return table

    def get_by_number(self, number: int) -> Optional[TableInDB]:
        return self.store.tables.get_by_number(number)

    def list(self, status: Optional[TableStatus] = None) -> List[TableInDB]:
        if status is None:
            return self.store.tables.list()
        return self.store.tables.list(status=status)

    def list_available(self) -> List[TableInDB]:
        return self.list(status=TableStatus.AVAILABLE)

    def create(self, request: TableCreate) -> TableInDB:
        with self.store.transaction():
            if self.store.tables.get_by_number(request.number):
                raise DuplicateId(f"Table number {request.number} already exists")
            table = TableInDB(
                id=self.new_id("table"),
                number=request.number,
                capacity=request.capacity,
                location=request.location,
                status=request.status,
            )
            created = self.store.tables.insert(table)
        logger.info(f"Table {created.id} (number {created.number}) created")
        return created

    def delete(self, table_id: str):
        if not self.store.tables.delete(table_id):
            raise NotFound(f"Table {table_id} not found")
        logger.info(f"Table {table_id} deleted")

    def assign(self, table_id: str, waiter_id: str) -> TableInDB:
        """Seat a waiter at the table; the table becomes occupied."""
        updated = self.store.tables.update(
            table_id, {"assigned_waiter": waiter_id, "status": TableStatus.OCCUPIED}
        )
        if not updated:
            raise NotFound(f"Table {table_id} not found")
        logger.info(f"Table {table_id} assigned to waiter {waiter_id}")
        return updated

    def occupy(self, table_number: int, order_id: str, waiter_id: Optional[str] = None) -> TableInDB:
        """Order-driven occupation: links the order (and its waiter) to the table."""
        with self.store.transaction():
            table = self.store.tables.get_by_number(table_number)
            if not table:
                raise NotFound(f"Table {table_number} not found")
            updated = self.store.tables.update(
                table.id,
                {"status": TableStatus.OCCUPIED, "assigned_waiter": waiter_id, "current_order": order_id},
            )
        logger.debug(f"Table {table_number} occupied by order {order_id}")
        return updated

    def reserve(self, table_number: int) -> TableInDB:
        with self.store.transaction():
            table = self.store.tables.get_by_number(table_number)
            if not table:
                raise NotFound(f"Table {table_number} not found")
            updated = self.store.tables.update(table.id, {"status": TableStatus.RESERVED})
        logger.debug(f"Table {table_number} marked reserved")
        return updated

    def mark_needs_assistance(self, table_id: str) -> TableInDB:
        updated = self.store.tables.update(table_id, {"status": TableStatus.NEED_ASSISTANCE})
        if not updated:
            raise NotFound(f"Table {table_id} not found")
        logger.info(f"Table {table_id} needs assistance")
        return updated

    def set_status(self, table_id: str, fields: Dict[str, Any]) -> TableInDB:
        """Administrative partial update; order-driven rules are not applied here.

        An available table never keeps a waiter or an order, whether the caller
        sets the status or leaves an available table's status untouched.
        """
        unknown = set(fields) - ADMIN_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update table fields: {sorted(unknown)}")
        fields = dict(fields)
        with self.store.transaction():
            table = self.get(table_id)
            if fields.get("status", table.status) == TableStatus.AVAILABLE:
                if fields.get("assigned_waiter"):
                    raise ValidationError(f"Cannot assign a waiter to available table {table.number}")
                fields.update(RELEASED_FIELDS)
            if "number" in fields:
                clash = self.store.tables.get_by_number(fields["number"])
                if clash and clash.id != table_id:
                    raise DuplicateId(f"Table number {fields['number']} already exists")
            updated = self.store.tables.update(table_id, fields)
        logger.info(f"Table {table_id} updated: {sorted(fields)}")
        return updated

    def release(self, table_number: int) -> Optional[TableInDB]:
        """Free the table: available, no waiter, no current order."""
        with self.store.transaction():
            table = self.store.tables.get_by_number(table_number)
            if not table:
                logger.warning(f"Cannot release table {table_number}: table no longer exists")
                return None
            updated = self.store.tables.update(table.id, dict(RELEASED_FIELDS))
        logger.info(f"Table {table_number} released")
        return updated

    def release_by_id(self, table_id: str) -> TableInDB:
        table = self.get(table_id)
        return self.release(table.number)
