from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nextable.schemas.response import Money


class MenuItemRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the menu item (e.g., Margherita).")
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, description="Selling price of the item.")
    category: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    allergens: List[str] = Field(default_factory=list)
    modifiers: Dict[str, Any] = Field(default_factory=dict)


class MenuItemUpdateRequest(BaseModel):
    """
    Only the fields present in the request body are applied, so a price of 0
    or an empty description are real updates.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    is_available: Optional[bool] = None
    allergens: Optional[List[str]] = None
    modifiers: Optional[Dict[str, Any]] = None


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant_id: int
    name: str
    description: Optional[str] = None
    price: Money
    category: str
    image_url: Optional[str] = None
    is_available: bool
    allergens: List[str] = Field(default_factory=list)
    modifiers: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
