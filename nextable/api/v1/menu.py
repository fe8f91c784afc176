import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from nextable.core.security import CurrentUser, get_current_user
from nextable.schemas.menu import MenuItemRequest, MenuItemResponse, MenuItemUpdateRequest
from nextable.schemas.response import MessageResponse, SuccessResponse
from nextable.services.access import MANAGERS, OWNERS, require_role
from nextable.services.menu_service import (
    create_menu_item,
    delete_menu_item,
    get_menu_item,
    list_menu_items,
    update_menu_item,
)

router = APIRouter()
log = logging.getLogger("uvicorn")


def _menu_item_data(item) -> dict:
    return MenuItemResponse.model_validate(item).model_dump(mode="json")


@router.get("/{restaurant_id}", response_model=SuccessResponse)
async def list_menu_endpoint(
    restaurant_id: int,
    category: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Available menu items, optionally filtered by category."""
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    items = await list_menu_items(restaurant_id, category)
    return SuccessResponse(data=[_menu_item_data(i) for i in items])


@router.get("/{restaurant_id}/{menu_item_id}", response_model=SuccessResponse)
async def get_menu_item_endpoint(
    restaurant_id: int,
    menu_item_id: int,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    item = await get_menu_item(menu_item_id, restaurant_id)
    return SuccessResponse(data=_menu_item_data(item))


@router.post("/{restaurant_id}", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_menu_item_endpoint(
    restaurant_id: int,
    payload: MenuItemRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    item = await create_menu_item(restaurant_id, **payload.model_dump())
    log.info(f"Menu item '{item.name}' added to restaurant {restaurant_id}.")
    return SuccessResponse(data=_menu_item_data(item))


@router.put("/{restaurant_id}/{menu_item_id}", response_model=SuccessResponse)
async def update_menu_item_endpoint(
    restaurant_id: int,
    menu_item_id: int,
    payload: MenuItemUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Partial update. Fields present in the body are applied as given, so
    ``{"price": 0}`` sets the price to zero.
    """
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    item = await update_menu_item(menu_item_id, restaurant_id, payload.model_dump(exclude_unset=True))
    return SuccessResponse(data=_menu_item_data(item))


@router.delete("/{restaurant_id}/{menu_item_id}", response_model=SuccessResponse)
async def delete_menu_item_endpoint(
    restaurant_id: int,
    menu_item_id: int,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, OWNERS, "Owner only")
    await delete_menu_item(menu_item_id, restaurant_id)
    return SuccessResponse(data=MessageResponse(message="Menu item deleted successfully").model_dump())
