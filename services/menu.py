import logging
from typing import List, Optional
from models.menu_management import MenuCategory
from schemas.menu_management import MenuItemCreate, MenuItemInDB, MenuItemUpdate
from services.exceptions import NotFound, ValidationError
from storage.base import EntityStore

logger = logging.getLogger(__name__)


class MenuCatalog:
    def __init__(self, store: EntityStore, id_generator):
        self.store = store
        self.new_id = id_generator

    def get(self, item_id: str) -> MenuItemInDB:
        item = self.store.menu_items.get(item_id)
        if not item:
            raise NotFound(f"Menu item {item_id} not found")
        return item

    def list(self, category: Optional[MenuCategory] = None, available: Optional[bool] = None) -> List[MenuItemInDB]:
        filters = {}
        if category is not None:
            filters["category"] = category
        if available is not None:
            filters["available"] = available
        return self.store.menu_items.list(**filters)

    def create(self, request: MenuItemCreate) -> MenuItemInDB:
        item = MenuItemInDB(id=self.new_id("item"), **request.model_dump())
        created = self.store.menu_items.insert(item)
        logger.info(f"Menu item {created.id} ({created.name}) created")
        return created

    def update(self, item_id: str, request: MenuItemUpdate) -> MenuItemInDB:
        fields = request.model_dump(exclude_unset=True)
        if not fields:
            raise ValidationError("No fields to update")
        updated = self.store.menu_items.update(item_id, fields)
        if not updated:
            raise NotFound(f"Menu item {item_id} not found")
        logger.info(f"Menu item {item_id} updated: {sorted(fields)}")
        return updated

    def set_availability(self, item_id: str, available: bool) -> MenuItemInDB:
        updated = self.store.menu_items.update(item_id, {"available": available})
        if not updated:
            raise NotFound(f"Menu item {item_id} not found")
        logger.info(f"Menu item {item_id} availability set to {available}")
        return updated

    def toggle_availability(self, item_id: str) -> MenuItemInDB:
        with self.store.transaction():
            item = self.get(item_id)
            return self.set_availability(item_id, not item.available)

    def delete(self, item_id: str):
        if not self.store.menu_items.delete(item_id):
            raise NotFound(f"Menu item {item_id} not found")
        logger.info(f"Menu item {item_id} deleted")
