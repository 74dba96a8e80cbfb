from pydantic import Field
from typing import List, Optional
from models.order_management import OrderStatus
from schemas.base import CamelModel, Money, UtcDateTime


class OrderItemBase(CamelModel):
    menu_item_id: str
    quantity: int
    notes: Optional[str] = None


class OrderItemCreate(OrderItemBase):
    # Omitted prices are filled in from the menu
    price: Optional[Money] = None


class OrderItemInDB(OrderItemBase):
    quantity: int = Field(..., gt=0)
    price: Money = Field(..., ge=0)


class OrderItemWithName(OrderItemInDB):
    name: str


class OrderCreate(CamelModel):
    table_number: Optional[int] = None
    items: Optional[List[OrderItemCreate]] = None
    assigned_waiter: Optional[str] = None
    customer_name: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus
    assigned_chef: Optional[str] = None
    chef_name: Optional[str] = None
    estimated_prep_time: Optional[int] = None
    start_time: Optional[str] = None


class KitchenAccept(CamelModel):
    chef_id: Optional[str] = None
    chef_name: Optional[str] = None
    estimated_prep_time: Optional[int] = None


class OrderInDB(CamelModel):
    id: str
    table_number: int
    items: List[OrderItemInDB]
    status: OrderStatus = OrderStatus.PENDING
    created_at: UtcDateTime
    updated_at: Optional[UtcDateTime] = None
    assigned_waiter: Optional[str] = None
    assigned_chef: Optional[str] = None
    chef_name: Optional[str] = None
    estimated_prep_time: Optional[int] = None
    start_time: Optional[str] = None
    customer_name: Optional[str] = None


class OrderWithNames(OrderInDB):
    items: List[OrderItemWithName]
