import logging

from fastapi import APIRouter, Depends, status

from nextable.core.security import CurrentUser, get_current_user
from nextable.models.restaurant import AssignmentRole
from nextable.schemas.restaurant import (
    RestaurantRequest,
    RestaurantResponse,
    RestaurantUpdateRequest,
    StaffAssignRequest,
    StaffResponse,
)
from nextable.schemas.response import MessageResponse, SuccessResponse
from nextable.services.access import MANAGERS, OWNERS, require_role
from nextable.services.restaurant_service import (
    assign_staff,
    create_restaurant,
    delete_restaurant,
    get_restaurant,
    list_restaurants,
    list_staff,
    revoke_staff,
    update_restaurant,
)

router = APIRouter()
log = logging.getLogger("uvicorn")


def _restaurant_data(restaurant, role=None) -> dict:
    data = RestaurantResponse.model_validate(restaurant)
    data.assignment_role = role
    return data.model_dump(mode="json")


def _staff_data(assignment) -> dict:
    return StaffResponse(
        user_id=assignment.user_id,
        email=assignment.user.email,
        assignment_role=assignment.assignment_role,
        is_active=assignment.is_active,
    ).model_dump(mode="json")


@router.get("", response_model=SuccessResponse)
async def list_restaurants_endpoint(current_user: CurrentUser = Depends(get_current_user)):
    """Restaurants the caller is actively assigned to."""
    restaurants = await list_restaurants(current_user.user_id)
    return SuccessResponse(data=[_restaurant_data(r) for r in restaurants])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_restaurant_endpoint(
    payload: RestaurantRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Creates a restaurant owned by the caller."""
    restaurant = await create_restaurant(current_user.user_id, **payload.model_dump())
    return SuccessResponse(data=_restaurant_data(restaurant, AssignmentRole.OWNER))


@router.get("/{restaurant_id}", response_model=SuccessResponse)
async def get_restaurant_endpoint(restaurant_id: int, current_user: CurrentUser = Depends(get_current_user)):
    restaurant, role = await get_restaurant(restaurant_id, current_user.user_id)
    return SuccessResponse(data=_restaurant_data(restaurant, role))


@router.put("/{restaurant_id}", response_model=SuccessResponse)
async def update_restaurant_endpoint(
    restaurant_id: int,
    payload: RestaurantUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    role = await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    restaurant = await update_restaurant(restaurant_id, payload.model_dump(exclude_unset=True))
    return SuccessResponse(data=_restaurant_data(restaurant, role))


@router.delete("/{restaurant_id}", response_model=SuccessResponse)
async def delete_restaurant_endpoint(restaurant_id: int, current_user: CurrentUser = Depends(get_current_user)):
    await require_role(current_user.user_id, restaurant_id, OWNERS, "Owner only")
    await delete_restaurant(restaurant_id)
    log.info(f"Restaurant {restaurant_id} deleted by user {current_user.user_id}")
    return SuccessResponse(data=MessageResponse(message="Restaurant deleted successfully").model_dump())


# ----------- Staff -----------

@router.get("/{restaurant_id}/staff", response_model=SuccessResponse)
async def list_staff_endpoint(restaurant_id: int, current_user: CurrentUser = Depends(get_current_user)):
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    assignments = await list_staff(restaurant_id)
    return SuccessResponse(data=[_staff_data(a) for a in assignments])


@router.post("/{restaurant_id}/staff", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def assign_staff_endpoint(
    restaurant_id: int,
    payload: StaffAssignRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Grants an assignment role on the restaurant to an existing user."""
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    assignment = await assign_staff(restaurant_id, payload.email, payload.assignment_role)
    return SuccessResponse(data=_staff_data(assignment))


@router.delete("/{restaurant_id}/staff/{user_id}", response_model=SuccessResponse)
async def revoke_staff_endpoint(
    restaurant_id: int,
    user_id: int,
    current_user: CurrentUser = Depends(get_current_user),
):
    await require_role(current_user.user_id, restaurant_id, MANAGERS, "Owner or manager only")
    await revoke_staff(restaurant_id, user_id)
    return SuccessResponse(data=MessageResponse(message="Staff assignment revoked").model_dump())
