import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, status

from nextable.core.security import CurrentUser, get_current_user
from nextable.models.order import Order, OrderStatus
from nextable.schemas.order import (
    OrderItemResponse,
    OrderRequest,
    OrderResponse,
    OrderUpdateRequest,
    TableOrdersResponse,
)
from nextable.schemas.response import MessageResponse, SuccessResponse
from nextable.services.access import ALL_ROLES, MANAGERS, ORDER_PLACERS, STAFF, require_role
from nextable.services.order_service import (
    delete_order,
    get_order,
    list_orders,
    list_table_orders,
    place_order,
    update_order,
)

router = APIRouter()
log = logging.getLogger("uvicorn")


def order_payload(order: Order, with_items: bool = False) -> dict:
    """Builds the response body for an order whose relations were prefetched."""
    placed_by = order.placed_by
    table = order.table
    data = OrderResponse(
        id=order.id,
        restaurant_id=order.restaurant_id,
        placed_by_user_id=order.placed_by_id,
        placed_by_email=placed_by.email if placed_by else None,
        table_id=order.table_id,
        table_number=table.number if table else None,
        status=order.status,
        total=order.total,
        notes=order.notes,
        estimated_ready=order.estimated_ready,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
    if with_items:
        # Prepare items data for clean output using the response schema
        data.items = [
            OrderItemResponse(
                id=i.id,
                menu_item_id=i.menu_item_id,
                name=i.menu_item.name if i.menu_item else None,
                quantity=i.quantity,
                price_at_order=i.price_at_order,
                notes=i.notes,
            )
            for i in order.items
        ]
        data.subtotal = sum((i.quantity * i.price_at_order for i in data.items), Decimal("0"))
    return data.model_dump(mode="json")


@router.get("/{restaurant_id}", response_model=SuccessResponse)
async def list_orders_endpoint(
    restaurant_id: int,
    status: Optional[OrderStatus] = None,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Lists the restaurant's orders, newest first, optionally filtered by status."""
    await require_role(current_user.user_id, restaurant_id, ALL_ROLES)
    orders = await list_orders(restaurant_id, status)
    return SuccessResponse(data=[order_payload(o) for o in orders])


@router.post("/{restaurant_id}", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def place_order_endpoint(
    restaurant_id: int,
    request_data: OrderRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Places a new order. The total is computed from current menu prices;
    any invalid line rejects the whole order.
    """
    await require_role(current_user.user_id, restaurant_id, ORDER_PLACERS)

    order = await place_order(
        restaurant_id=restaurant_id,
        user_id=current_user.user_id,
        table_id=request_data.table_id,
        items=[item.model_dump() for item in request_data.items],
        notes=request_data.notes,
    )
    log.info(f"Order {order.id} placed successfully by user {current_user.user_id}.")
    return SuccessResponse(data=order_payload(order, with_items=True))


@router.get("/{restaurant_id}/tables/{table_id}", response_model=SuccessResponse)
async def list_table_orders_endpoint(
    restaurant_id: int,
    table_id: int,
    status: Optional[OrderStatus] = None,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, ALL_ROLES)
    orders = await list_table_orders(restaurant_id, table_id, status)
    data = TableOrdersResponse(
        restaurant_id=restaurant_id,
        table_id=table_id,
        orders=[order_payload(o) for o in orders],
    ).model_dump(mode="json")
    return SuccessResponse(data=data)


@router.get("/{restaurant_id}/{order_id}", response_model=SuccessResponse)
async def get_order_endpoint(
    restaurant_id: int,
    order_id: int,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Fetches an order with its line items and their subtotal."""
    await require_role(current_user.user_id, restaurant_id, ALL_ROLES)
    order = await get_order(order_id, restaurant_id)
    return SuccessResponse(data=order_payload(order, with_items=True))


@router.put("/{restaurant_id}/{order_id}", response_model=SuccessResponse)
async def update_order_endpoint(
    restaurant_id: int,
    order_id: int,
    payload: OrderUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Updates status, notes or estimated ready time. Staff only."""
    await require_role(current_user.user_id, restaurant_id, STAFF, "Staff access only")
    order = await update_order(order_id, restaurant_id, payload.model_dump(exclude_unset=True))
    return SuccessResponse(data=order_payload(order, with_items=True))


@router.delete("/{restaurant_id}/{order_id}", response_model=SuccessResponse)
async def delete_order_endpoint(
    restaurant_id: int,
    order_id: int,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    await delete_order(order_id, restaurant_id)
    return SuccessResponse(data=MessageResponse(message="Order deleted successfully").model_dump())
