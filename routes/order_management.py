from fastapi import APIRouter, Depends, Query, status
import logging
from typing import List, Optional
from routes.notifications import notify_order_status_update
from models.order_management import OrderStatus
from schemas.order_management import (
    OrderCreate,
    OrderItemCreate,
    OrderStatusUpdate,
    OrderWithNames,
)
from services.core import RestaurantCore
from services.exceptions import ValidationError
from utils.dependencies import get_core

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])


def parse_statuses(raw: Optional[str]) -> List[OrderStatus]:
    """`pending,preparing` -> [OrderStatus.PENDING, OrderStatus.PREPARING]"""
    if not raw:
        return []
    try:
        return [OrderStatus(value.strip()) for value in raw.split(",") if value.strip()]
    except ValueError as e:
        raise ValidationError(f"Invalid order status filter: {raw}") from e


@router.get("", response_model=List[OrderWithNames])
async def list_orders(
    order_status: Optional[str] = Query(None, alias="status"),
    core: RestaurantCore = Depends(get_core)
):
    orders = core.orders.list(parse_statuses(order_status))
    return [core.orders.with_item_names(order) for order in orders]


@router.post("", response_model=OrderWithNames, status_code=status.HTTP_201_CREATED)
async def create_order(order: OrderCreate, core: RestaurantCore = Depends(get_core)):
    logger.debug(f"Order request: {order.model_dump()}")
    created = core.orders.create(order)
    await notify_order_status_update(created)
    return core.orders.with_item_names(created)


@router.get("/{order_id}", response_model=OrderWithNames)
async def get_order(order_id: str, core: RestaurantCore = Depends(get_core)):
    return core.orders.with_item_names(core.orders.get(order_id))


@router.put("/{order_id}/status", response_model=OrderWithNames)
async def update_order_status(
    order_id: str,
    status_update: OrderStatusUpdate,
    core: RestaurantCore = Depends(get_core)
):
    fields = status_update.model_dump(exclude={"status"}, exclude_none=True)
    updated = core.orders.update_status(order_id, status_update.status, **fields)
    await notify_order_status_update(updated)
    return core.orders.with_item_names(updated)


@router.post("/{order_id}/items", response_model=OrderWithNames)
async def add_order_items(
    order_id: str,
    items: List[OrderItemCreate],
    core: RestaurantCore = Depends(get_core)
):
    updated = core.orders.add_items(order_id, items)
    return core.orders.with_item_names(updated)
