import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Type
from pydantic import BaseModel
from schemas.billing import BillInDB
from schemas.menu_management import MenuItemInDB
from schemas.order_management import OrderInDB
from schemas.reservation import ReservationInDB
from schemas.staff import StaffInDB
from schemas.table_management import TableInDB
from services.exceptions import DuplicateId
from storage.base import (
    BillLookup,
    Collection,
    EntityStore,
    StaffLookup,
    TableLookup,
    matches,
    merge_fields,
)

logger = logging.getLogger(__name__)


class MemoryCollection(Collection):
    def __init__(self, store: "MemoryStore", entity_cls: Type[BaseModel], sort_key: Optional[Callable] = None):
        self._store = store
        self.entity_cls = entity_cls
        self._sort_key = sort_key
        self.rows: Dict[str, BaseModel] = {}

    def get(self, entity_id: str) -> Optional[BaseModel]:
        with self._store.lock:
            entity = self.rows.get(entity_id)
            return entity.model_copy(deep=True) if entity is not None else None

    def list(self, **filters) -> List[BaseModel]:
        self._check_filters(filters)
        with self._store.lock:
            found = [entity.model_copy(deep=True) for entity in self.rows.values() if matches(entity, filters)]
        if self._sort_key:
            found.sort(key=self._sort_key)
        return found

    def insert(self, entity: BaseModel) -> BaseModel:
        with self._store.transaction():
            if entity.id in self.rows:
                raise DuplicateId(f"{self.entity_cls.__name__} {entity.id} already exists")
            self.rows[entity.id] = entity.model_copy(deep=True)
        return entity.model_copy(deep=True)

    def update(self, entity_id: str, fields: Dict[str, Any]) -> Optional[BaseModel]:
        with self._store.transaction():
            current = self.rows.get(entity_id)
            if current is None:
                return None
            updated = merge_fields(current, fields)
            self.rows[entity_id] = updated
        return updated.model_copy(deep=True)

    def delete(self, entity_id: str) -> bool:
        with self._store.transaction():
            return self.rows.pop(entity_id, None) is not None


class MemoryTableCollection(TableLookup, MemoryCollection):
    pass


class MemoryStaffCollection(StaffLookup, MemoryCollection):
    pass


class MemoryBillCollection(BillLookup, MemoryCollection):
    pass


class MemoryStore(EntityStore):
    """All collections in process memory behind one re-entrant lock."""

    def __init__(self):
        self.lock = threading.RLock()
        self._depth = 0
        self.menu_items = MemoryCollection(self, MenuItemInDB)
        self.tables = MemoryTableCollection(self, TableInDB, sort_key=lambda t: t.number)
        self.reservations = MemoryCollection(
            self, ReservationInDB, sort_key=lambda r: (r.reservation_date, r.reservation_time)
        )
        self.orders = MemoryCollection(self, OrderInDB, sort_key=lambda o: o.created_at)
        self.bills = MemoryBillCollection(self, BillInDB, sort_key=lambda b: b.created_at)
        self.staff = MemoryStaffCollection(self, StaffInDB)
        self._collections = [self.menu_items, self.tables, self.reservations, self.orders, self.bills, self.staff]

    @contextmanager
    def transaction(self):
        with self.lock:
            snapshot = [dict(collection.rows) for collection in self._collections] if self._depth == 0 else None
            self._depth += 1
            try:
                yield self
            except Exception:
                if snapshot is not None:
                    # Entities are replaced, never mutated in place, so a shallow copy restores them
                    for collection, rows in zip(self._collections, snapshot):
                        collection.rows = rows
                    logger.debug("Rolled back in-memory transaction")
                raise
            finally:
                self._depth -= 1

    def reset(self):
        with self.lock:
            for collection in self._collections:
                collection.rows = {}
