from fastapi import APIRouter, Depends, status
from typing import List, Optional
from models.menu_management import MenuCategory
from schemas.menu_management import MenuItemCreate, MenuItemUpdate, MenuItemInDB
from services.core import RestaurantCore
from utils.dependencies import get_core
import logging
# Setup logging
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/menu", tags=["menu"])


@router.get("", response_model=List[MenuItemInDB])
async def list_menu_items(
    category: Optional[MenuCategory] = None,
    available: Optional[bool] = None,
    core: RestaurantCore = Depends(get_core)
):
    return core.menu.list(category=category, available=available)


@router.post("", response_model=MenuItemInDB, status_code=status.HTTP_201_CREATED)
async def create_menu_item(item: MenuItemCreate, core: RestaurantCore = Depends(get_core)):
    return core.menu.create(item)


@router.get("/{item_id}", response_model=MenuItemInDB)
async def get_menu_item(item_id: str, core: RestaurantCore = Depends(get_core)):
    return core.menu.get(item_id)


@router.put("/{item_id}", response_model=MenuItemInDB)
async def update_menu_item(item_id: str, item_update: MenuItemUpdate, core: RestaurantCore = Depends(get_core)):
    return core.menu.update(item_id, item_update)


@router.post("/{item_id}/toggle-availability", response_model=MenuItemInDB)
async def toggle_menu_item_availability(item_id: str, core: RestaurantCore = Depends(get_core)):
    return core.menu.toggle_availability(item_id)


@router.delete("/{item_id}")
async def delete_menu_item(item_id: str, core: RestaurantCore = Depends(get_core)):
    core.menu.delete(item_id)
    return {"success": True, "message": "Menu item deleted successfully"}
