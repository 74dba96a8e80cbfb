from sqlalchemy import Column, String, Text, Boolean, DateTime, Numeric, Enum
from sqlalchemy.sql import func
from utils.database import Base
import enum


class MenuCategory(str, enum.Enum):
    APPETIZER = "appetizer"
    MAIN = "main"
    DESSERT = "dessert"
    BEVERAGE = "beverage"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(50), primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(Enum(MenuCategory, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)
    image_url = Column(String(500), default="")
    # JSON-encoded string lists
    ingredients = Column(Text, nullable=True)
    allergens = Column(Text, nullable=True)
    available = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
