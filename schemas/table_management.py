from pydantic import Field
from typing import Optional
from models.table_management import TableStatus
from schemas.base import CamelModel


class TableBase(CamelModel):
    number: int = Field(..., gt=0)
    capacity: int = Field(..., gt=0)
    location: Optional[str] = None


class TableCreate(TableBase):
    # The dashboards post `tableNumber`
    number: int = Field(..., gt=0, validation_alias="tableNumber")
    status: TableStatus = TableStatus.AVAILABLE


class TableUpdate(CamelModel):
    number: Optional[int] = Field(None, gt=0, validation_alias="tableNumber")
    capacity: Optional[int] = Field(None, gt=0)
    status: Optional[TableStatus] = None
    assigned_waiter: Optional[str] = None
    location: Optional[str] = None


class TableAssign(CamelModel):
    waiter_id: str


class TableInDB(TableBase):
    id: str
    status: TableStatus = TableStatus.AVAILABLE
    assigned_waiter: Optional[str] = None
    current_order: Optional[str] = None
