"""
Sample data loaded into a fresh store: the menu, the dining room and the staff accounts.
"""
import logging
from decimal import Decimal
from functools import lru_cache
from models.menu_management import MenuCategory
from models.staff import StaffRole
from schemas.menu_management import MenuItemInDB
from schemas.staff import StaffInDB
from schemas.table_management import TableInDB
from storage.base import EntityStore
from utils.auth import get_password_hash

logger = logging.getLogger(__name__)

SAMPLE_MENU_ITEMS = [
    {
        "id": "1",
        "name": "Fattoush Salad",
        "description": "Fresh mixed greens with crispy pita chips, tomatoes, cucumbers, and tangy sumac dressing",
        "price": Decimal("45.00"),
        "category": MenuCategory.APPETIZER,
        "image_url": "https://images.unsplash.com/photo-1540189549336-e6e99c3679fe?w=300&h=200&fit=crop",
        "ingredients": ["mixed greens", "pita bread", "tomatoes", "cucumbers", "radish", "sumac", "olive oil", "lemon", "mint"],
        "allergens": ["gluten"],
    },
    {
        "id": "3",
        "name": "Koshari",
        "description": "Traditional Egyptian dish with rice, lentils, pasta, chickpeas, and spicy tomato sauce",
        "price": Decimal("65.00"),
        "category": MenuCategory.MAIN,
        "image_url": "https://everylittlecrumb.com/wp-content/uploads/koshary-3.jpg",
        "ingredients": ["rice", "lentils", "pasta", "chickpeas", "tomatoes", "onions", "garlic", "cumin", "coriander"],
        "allergens": ["gluten"],
    },
    {
        "id": "4",
        "name": "Grilled Kofta",
        "description": "Spiced minced meat grilled on skewers, served with tahini sauce and fresh vegetables",
        "price": Decimal("120.00"),
        "category": MenuCategory.MAIN,
        "image_url": "https://www.recipetineats.com/tachyon/2014/11/Lamb-Koftas_7.jpg",
        "ingredients": ["ground beef", "onions", "parsley", "cumin", "coriander", "paprika", "garlic", "tahini"],
        "allergens": [],
    },
    {
        "id": "5",
        "name": "Molokhia",
        "description": "Traditional Egyptian stew made with jute leaves, served with rice and chicken",
        "price": Decimal("95.00"),
        "category": MenuCategory.MAIN,
        "image_url": "",
        "ingredients": ["molokhia leaves", "chicken", "garlic", "coriander", "onions", "rice", "chicken broth"],
        "allergens": [],
    },
    {
        "id": "6",
        "name": "Basbousa",
        "description": "Sweet semolina cake soaked in syrup, topped with coconut and almonds",
        "price": Decimal("40.00"),
        "category": MenuCategory.DESSERT,
        "image_url": "https://amiraspantry.com/wp-content/uploads/2020/04/basbousa-1.jpg",
        "ingredients": ["semolina", "sugar", "butter", "yogurt", "coconut", "almonds", "rose water", "syrup"],
        "allergens": ["gluten", "dairy", "nuts"],
    },
    {
        "id": "7",
        "name": "Umm Ali",
        "description": "Traditional Egyptian bread pudding with milk, nuts, and raisins",
        "price": Decimal("45.00"),
        "category": MenuCategory.DESSERT,
        "image_url": "https://upload.wikimedia.org/wikipedia/commons/thumb/9/9c/Umm_Ali.JPG/1920px-Umm_Ali.JPG",
        "ingredients": ["puff pastry", "milk", "sugar", "almonds", "pistachios", "raisins", "coconut", "cream"],
        "allergens": ["gluten", "dairy", "nuts"],
    },
    {
        "id": "8",
        "name": "Karkadeh (Hibiscus Tea)",
        "description": "Refreshing hibiscus tea served hot or cold, sweetened to taste",
        "price": Decimal("25.00"),
        "category": MenuCategory.BEVERAGE,
        "image_url": "https://www.shirincook.com/wp-content/uploads/2025/06/Karkadeh-.webp",
        "ingredients": ["hibiscus flowers", "water", "sugar", "mint"],
        "allergens": [],
    },
    {
        "id": "9",
        "name": "Egyptian Coffee",
        "description": "Strong traditional coffee with cardamom, served in small cups",
        "price": Decimal("20.00"),
        "category": MenuCategory.BEVERAGE,
        "image_url": "",
        "ingredients": ["coffee beans", "cardamom", "water", "sugar"],
        "allergens": [],
    },
]

TABLE_CAPACITIES = [2, 4, 4, 6, 2, 4, 8, 4, 6, 2]

# (id, username, password, role, name)
SAMPLE_STAFF = [
    ("waiter", "waiter", "waiter123", StaffRole.WAITER, "Ahmed Waiter"),
    ("manager", "manager", "manager123", StaffRole.MANAGER, "Manager"),
    ("chef1", "chef1", "chef123", StaffRole.CHEF, "Head Chef"),
]


@lru_cache(maxsize=None)
def _hashed(password: str) -> str:
    return get_password_hash(password)


def seed_store(store: EntityStore):
    with store.transaction():
        for item in SAMPLE_MENU_ITEMS:
            store.menu_items.insert(MenuItemInDB(**item))
        for number, capacity in enumerate(TABLE_CAPACITIES, start=1):
            store.tables.insert(TableInDB(id=f"table_{number}", number=number, capacity=capacity))
        for staff_id, username, password, role, name in SAMPLE_STAFF:
            store.staff.insert(StaffInDB(
                id=staff_id, username=username, password=_hashed(password), role=role, name=name,
            ))
    logger.info(
        f"Seeded {len(SAMPLE_MENU_ITEMS)} menu items, {len(TABLE_CAPACITIES)} tables, {len(SAMPLE_STAFF)} staff"
    )
