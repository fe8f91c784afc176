import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from nextable.core.security import CurrentUser, get_current_user
from nextable.schemas.response import MessageResponse, SuccessResponse
from nextable.schemas.table import (
    RestaurantTablesResponse,
    TableRequest,
    TableResponse,
    TableUpdateRequest,
)
from nextable.services.access import ALL_ROLES, MANAGERS, require_role
from nextable.services.table_service import (
    create_table,
    delete_table,
    get_table,
    get_visible_table,
    list_restaurant_tables,
    list_visible_tables,
    update_table,
)

router = APIRouter()
log = logging.getLogger("uvicorn")


def _table_data(table) -> dict:
    return TableResponse.model_validate(table).model_dump(mode="json")


@router.get("", response_model=SuccessResponse)
async def list_tables_endpoint(
    restaurant_id: Optional[int] = None,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Tables across every restaurant the caller is assigned to."""
    tables = await list_visible_tables(current_user.user_id, restaurant_id)
    return SuccessResponse(data=[_table_data(t) for t in tables])


@router.get("/restaurant/{restaurant_id}", response_model=SuccessResponse)
async def list_restaurant_tables_endpoint(
    restaurant_id: int,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, ALL_ROLES, "Access to this restaurant denied")
    tables = await list_restaurant_tables(restaurant_id)
    data = RestaurantTablesResponse(
        restaurant_id=restaurant_id,
        tables=[TableResponse.model_validate(t) for t in tables],
    ).model_dump(mode="json")
    return SuccessResponse(data=data)


@router.get("/{table_id}", response_model=SuccessResponse)
async def get_table_endpoint(table_id: int, current_user: CurrentUser = Depends(get_current_user)):
    table = await get_visible_table(table_id, current_user.user_id)
    return SuccessResponse(data=_table_data(table))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_table_endpoint(payload: TableRequest, current_user: CurrentUser = Depends(get_current_user)):
    await require_role(
        current_user.user_id, payload.restaurant_id, MANAGERS, "Owner or manager only, Or no such restaurant"
    )
    table = await create_table(**payload.model_dump())
    return SuccessResponse(data=_table_data(table))


@router.put("/{table_id}", response_model=SuccessResponse)
async def update_table_endpoint(
    table_id: int,
    payload: TableUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Updates table fields, including its status. Owner or manager only."""
    table = await get_table(table_id)
    await require_role(current_user.user_id, table.restaurant_id, MANAGERS, "Owner or manager only")
    table = await update_table(table, payload.model_dump(exclude_unset=True))
    return SuccessResponse(data=_table_data(table))


@router.delete("/{table_id}", response_model=SuccessResponse)
async def delete_table_endpoint(table_id: int, current_user: CurrentUser = Depends(get_current_user)):
    table = await get_table(table_id)
    await require_role(current_user.user_id, table.restaurant_id, MANAGERS, "Owner or manager only")
    await delete_table(table_id)
    return SuccessResponse(data=MessageResponse(message="Table deleted successfully").model_dump())
