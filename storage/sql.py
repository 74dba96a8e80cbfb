import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Type
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models import Bill, MenuItem, Order, OrderItem, Reservation, Staff, Table
from schemas.billing import BillInDB
from schemas.menu_management import MenuItemInDB
from schemas.order_management import OrderInDB
from schemas.reservation import ReservationInDB
from schemas.staff import StaffInDB
from schemas.table_management import TableInDB
from services.exceptions import DuplicateId, StorageFailure
from storage.base import BillLookup, Collection, EntityStore, StaffLookup, TableLookup, merge_fields
from utils.database import Base, make_engine, make_session_factory
from utils.json_fields import decode_records, decode_string_list, encode_records, encode_string_list

logger = logging.getLogger(__name__)


def _row_dict(row) -> Dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__mapper__.column_attrs}


class SqlCollection(Collection):
    def __init__(self, store: "SqlStore", orm_cls, entity_cls: Type[BaseModel], order_by=()):
        self._store = store
        self.orm_cls = orm_cls
        self.entity_cls = entity_cls
        self._order_by = order_by

    @property
    def session(self) -> Session:
        return self._store.session

    # Row <-> entity mapping; collections with non-scalar fields override these
    def to_entity(self, row) -> BaseModel:
        return self.entity_cls.model_validate(_row_dict(row))

    def write(self, row, entity: BaseModel):
        for field, value in entity.model_dump().items():
            setattr(row, field, value)

    def get(self, entity_id: str) -> Optional[BaseModel]:
        with self._store.reading():
            row = self.session.get(self.orm_cls, entity_id)
            return self.to_entity(row) if row is not None else None

    def list(self, **filters) -> List[BaseModel]:
        self._check_filters(filters)
        with self._store.reading():
            query = self.session.query(self.orm_cls)
            for field, expected in filters.items():
                column = getattr(self.orm_cls, field)
                if isinstance(expected, (list, tuple, set, frozenset)):
                    query = query.filter(column.in_(list(expected)))
                else:
                    query = query.filter(column == expected)
            if self._order_by:
                query = query.order_by(*self._order_by)
            return [self.to_entity(row) for row in query.all()]

    def insert(self, entity: BaseModel) -> BaseModel:
        with self._store.transaction():
            if self.session.get(self.orm_cls, entity.id) is not None:
                raise DuplicateId(f"{self.entity_cls.__name__} {entity.id} already exists")
            row = self.orm_cls()
            self.write(row, entity)
            self.session.add(row)
            self.session.flush()
            return self.to_entity(row)

    def update(self, entity_id: str, fields: Dict[str, Any]) -> Optional[BaseModel]:
        with self._store.transaction():
            row = self.session.get(self.orm_cls, entity_id)
            if row is None:
                return None
            updated = merge_fields(self.to_entity(row), fields)
            self.write(row, updated)
            self.session.flush()
            return updated

    def delete(self, entity_id: str) -> bool:
        with self._store.transaction():
            row = self.session.get(self.orm_cls, entity_id)
            if row is None:
                return False
            self.session.delete(row)
            self.session.flush()
            return True


class SqlMenuItemCollection(SqlCollection):
    def to_entity(self, row):
        data = _row_dict(row)
        data["ingredients"] = decode_string_list(row.ingredients)
        data["allergens"] = decode_string_list(row.allergens)
        return self.entity_cls.model_validate(data)

    def write(self, row, entity):
        data = entity.model_dump()
        data["ingredients"] = encode_string_list(entity.ingredients)
        data["allergens"] = encode_string_list(entity.allergens)
        for field, value in data.items():
            setattr(row, field, value)


class SqlTableCollection(TableLookup, SqlCollection):
    pass


class SqlStaffCollection(StaffLookup, SqlCollection):
    pass


class SqlOrderCollection(SqlCollection):
    def to_entity(self, row):
        data = _row_dict(row)
        data["items"] = [_row_dict(item) for item in row.items]
        return self.entity_cls.model_validate(data)

    def write(self, row, entity):
        for field, value in entity.model_dump(exclude={"items"}).items():
            setattr(row, field, value)
        # delete-orphan cascade drops the replaced item rows
        row.items = [
            OrderItem(
                menu_item_id=item.menu_item_id,
                quantity=item.quantity,
                price=item.price,
                notes=item.notes,
            )
            for item in entity.items
        ]


class SqlBillCollection(BillLookup, SqlCollection):
    def to_entity(self, row):
        data = _row_dict(row)
        data["items"] = decode_records(row.items)
        return self.entity_cls.model_validate(data)

    def write(self, row, entity):
        for field, value in entity.model_dump(exclude={"items"}).items():
            setattr(row, field, value)
        row.items = encode_records(item.model_dump() for item in entity.items)


class SqlStore(EntityStore):
    """Durable store on SQLAlchemy; one session serialized by a re-entrant lock."""

    def __init__(self, url: Optional[str] = None, engine=None):
        self.engine = engine if engine is not None else make_engine(url)
        Base.metadata.create_all(bind=self.engine)
        self.session = make_session_factory(self.engine)()
        self.lock = threading.RLock()
        self._depth = 0
        self.menu_items = SqlMenuItemCollection(self, MenuItem, MenuItemInDB)
        self.tables = SqlTableCollection(self, Table, TableInDB, order_by=(Table.number,))
        self.reservations = SqlCollection(
            self, Reservation, ReservationInDB, order_by=(Reservation.reservation_date, Reservation.reservation_time)
        )
        self.orders = SqlOrderCollection(self, Order, OrderInDB, order_by=(Order.created_at,))
        self.bills = SqlBillCollection(self, Bill, BillInDB, order_by=(Bill.created_at,))
        self.staff = SqlStaffCollection(self, Staff, StaffInDB)

    @contextmanager
    def reading(self):
        with self.lock:
            try:
                yield self.session
            except SQLAlchemyError as e:
                logger.error(f"Storage read failed: {str(e)}")
                raise StorageFailure(f"Storage read failed: {str(e)}") from e

    @contextmanager
    def transaction(self):
        with self.lock:
            outermost = self._depth == 0
            self._depth += 1
            try:
                yield self
                if outermost:
                    self.session.commit()
            except SQLAlchemyError as e:
                if outermost:
                    self.session.rollback()
                logger.error(f"Storage transaction failed, rolled back: {str(e)}")
                raise StorageFailure(f"Storage operation failed: {str(e)}") from e
            except Exception:
                if outermost:
                    self.session.rollback()
                raise
            finally:
                self._depth -= 1

    def reset(self):
        with self.transaction():
            for table in reversed(Base.metadata.sorted_tables):
                self.session.execute(table.delete())
        self.session.expunge_all()

    def close(self):
        self.session.close()
        self.engine.dispose()
