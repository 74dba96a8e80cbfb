from pydantic import Field, field_validator
from typing import Optional, List
from models.menu_management import MenuCategory
from schemas.base import CamelModel, Money


def _dedupe(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


class MenuItemBase(CamelModel):
    name: str
    description: Optional[str] = ""
    price: Money = Field(..., ge=0)
    category: MenuCategory
    image_url: Optional[str] = ""
    ingredients: List[str] = Field(default_factory=list)
    allergens: List[str] = Field(default_factory=list)
    available: bool = True

    @field_validator("allergens")
    @classmethod
    def unique_allergens(cls, v):
        return _dedupe(v)


class MenuItemCreate(MenuItemBase):
    pass


class MenuItemUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Money] = Field(None, ge=0)
    category: Optional[MenuCategory] = None
    image_url: Optional[str] = None
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    available: Optional[bool] = None


class MenuAvailabilityUpdate(CamelModel):
    available: bool


class MenuItemInDB(MenuItemBase):
    id: str
