from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt

from nextable.models.order import OrderStatus
from nextable.schemas.response import Money


class OrderItemRequest(BaseModel):
    """Schema for a single item in the order request."""
    menu_item_id: int
    # Strict so booleans and numeric strings are refused; the sign is checked per line at placement
    quantity: StrictInt
    notes: Optional[str] = None


class OrderRequest(BaseModel):
    """Schema for the full order placement request body."""
    table_id: Optional[int] = None
    items: List[OrderItemRequest]
    notes: Optional[str] = None


class OrderUpdateRequest(BaseModel):
    """Only the fields present in the request body are applied."""
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None
    estimated_ready: Optional[datetime] = None


class OrderItemResponse(BaseModel):
    """Schema for an item inside the detailed order response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: Optional[int] = None
    name: Optional[str] = None
    quantity: int
    price_at_order: Money
    notes: Optional[str] = None


class OrderResponse(BaseModel):
    """Schema for an order, optionally with its items."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant_id: int
    placed_by_user_id: Optional[int] = None
    placed_by_email: Optional[str] = None
    table_id: Optional[int] = None
    table_number: Optional[int] = None
    status: OrderStatus
    total: Money
    subtotal: Optional[Money] = None
    notes: Optional[str] = None
    estimated_ready: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: Optional[List[OrderItemResponse]] = None


class TableOrdersResponse(BaseModel):
    restaurant_id: int
    table_id: int
    orders: List[OrderResponse]
