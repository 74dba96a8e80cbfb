"""
Storage contract shared by the in-memory and SQLAlchemy backends.

Every entity lives in one collection with the same five primitives:
get / list / insert / update / delete. Lookup misses return ``None``;
``update`` applies only the keys present in the payload.
"""
import abc
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from services.exceptions import ValidationError


def merge_fields(entity: BaseModel, fields: Dict[str, Any]) -> BaseModel:
    """Return a validated copy of ``entity`` with ``fields`` applied."""
    model_cls = type(entity)
    unknown = set(fields) - set(model_cls.model_fields)
    if unknown:
        raise ValidationError(f"Unknown {model_cls.__name__} fields: {sorted(unknown)}")
    if "id" in fields and fields["id"] != getattr(entity, "id"):
        raise ValidationError("Entity id cannot be changed")
    try:
        return model_cls.model_validate({**entity.model_dump(), **fields})
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model_cls.__name__} update: {e.errors()[0]['msg']}") from e


def matches(entity: BaseModel, filters: Dict[str, Any]) -> bool:
    for field, expected in filters.items():
        value = getattr(entity, field)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class Collection(abc.ABC):
    entity_cls: Type[BaseModel]

    @abc.abstractmethod
    def get(self, entity_id: str) -> Optional[BaseModel]:
        ...

    @abc.abstractmethod
    def list(self, **filters) -> List[BaseModel]:
        ...

    @abc.abstractmethod
    def insert(self, entity: BaseModel) -> BaseModel:
        ...

    @abc.abstractmethod
    def update(self, entity_id: str, fields: Dict[str, Any]) -> Optional[BaseModel]:
        ...

    @abc.abstractmethod
    def delete(self, entity_id: str) -> bool:
        ...

    def find_one(self, **filters) -> Optional[BaseModel]:
        found = self.list(**filters)
        return found[0] if found else None

    def _check_filters(self, filters: Dict[str, Any]):
        unknown = set(filters) - set(self.entity_cls.model_fields)
        if unknown:
            raise ValidationError(f"Cannot filter {self.entity_cls.__name__} by {sorted(unknown)}")


class TableLookup:
    def get_by_number(self, number: int):
        return self.find_one(number=number)


class StaffLookup:
    def get_by_username(self, username: str):
        return self.find_one(username=username)


class BillLookup:
    def get_by_order(self, order_id: str):
        return self.find_one(order_id=order_id)


class EntityStore(abc.ABC):
    menu_items: Collection
    tables: Collection
    reservations: Collection
    orders: Collection
    bills: Collection
    staff: Collection

    @abc.abstractmethod
    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """Run a block as one atomic unit; nested blocks join the outer one."""

    @abc.abstractmethod
    def reset(self):
        """Drop every entity from every collection."""

    def close(self):
        pass
