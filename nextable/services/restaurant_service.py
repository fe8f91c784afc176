import logging
from typing import Dict, List, Optional, Tuple

from tortoise.transactions import in_transaction

from nextable.core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from nextable.models.restaurant import AssignmentRole, Restaurant, UserRestaurant
from nextable.models.user import User

log = logging.getLogger(__name__)


async def list_restaurants(user_id: int) -> List[Restaurant]:
    """Restaurants the user holds an active assignment on, newest first."""
    return await Restaurant.filter(
        assignments__user_id=user_id, assignments__is_active=True
    ).order_by("-created_at").distinct()


async def get_restaurant(restaurant_id: int, user_id: int) -> Tuple[Restaurant, AssignmentRole]:
    """Returns the restaurant with the caller's role; 404 when the caller has no access."""
    assignment = await UserRestaurant.get_or_none(
        restaurant_id=restaurant_id, user_id=user_id, is_active=True
    ).prefetch_related("restaurant")
    if not assignment:
        raise NotFoundError("Restaurant not found or access denied")
    return assignment.restaurant, AssignmentRole(assignment.assignment_role)


async def create_restaurant(
    user_id: int,
    name: str,
    address: Optional[str] = None,
    phone: Optional[str] = None,
    description: Optional[str] = None,
) -> Restaurant:
    """Creates the restaurant and assigns its creator as owner in one transaction."""
    async with in_transaction() as conn:
        restaurant = await Restaurant.create(
            name=name,
            address=address,
            phone=phone,
            description=description,
            owner_id=user_id,
            using_db=conn,
        )
        await UserRestaurant.create(
            user_id=user_id,
            restaurant=restaurant,
            assignment_role=AssignmentRole.OWNER,
            using_db=conn,
        )

    log.info(f"Restaurant {restaurant.id} created by user {user_id}")
    return restaurant


async def update_restaurant(restaurant_id: int, changes: Dict) -> Restaurant:
    if not changes:
        raise BadRequestError("At least one field required")
    if "name" in changes and not changes["name"]:
        raise BadRequestError("Name cannot be empty")

    restaurant = await Restaurant.get_or_none(id=restaurant_id)
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    restaurant.update_from_dict(changes)
    await restaurant.save(update_fields=[*changes.keys(), "updated_at"])
    return restaurant


async def delete_restaurant(restaurant_id: int) -> None:
    # Tables, menu items, assignments and orders go with it
    deleted = await Restaurant.filter(id=restaurant_id).delete()
    if not deleted:
        raise NotFoundError("Restaurant not found")
    log.info(f"Restaurant {restaurant_id} deleted")


# ----------- Staff assignments -----------

async def list_staff(restaurant_id: int) -> List[UserRestaurant]:
    return await UserRestaurant.filter(restaurant_id=restaurant_id).prefetch_related("user").order_by("id")


async def assign_staff(restaurant_id: int, email: str, role: AssignmentRole) -> UserRestaurant:
    """
    Grants ``role`` to the user with ``email``. An existing assignment is
    updated and reactivated rather than duplicated.
    """
    if role == AssignmentRole.OWNER:
        raise PermissionDeniedError("Unauthorized: The owner role cannot be assigned")

    user = await User.get_or_none(email=email.lower())
    if not user:
        raise NotFoundError(f"No user with email {email}")

    assignment = await UserRestaurant.get_or_none(user_id=user.id, restaurant_id=restaurant_id)
    if assignment is None:
        assignment = await UserRestaurant.create(
            user=user, restaurant_id=restaurant_id, assignment_role=role
        )
    else:
        if assignment.assignment_role == AssignmentRole.OWNER:
            raise PermissionDeniedError("Unauthorized: The owner's role cannot be changed")
        assignment.assignment_role = role
        assignment.is_active = True
        await assignment.save(update_fields=["assignment_role", "is_active", "updated_at"])

    assignment.user = user
    log.info(f"User {user.id} assigned as {role.value} on restaurant {restaurant_id}")
    return assignment


async def revoke_staff(restaurant_id: int, user_id: int) -> UserRestaurant:
    assignment = await UserRestaurant.get_or_none(user_id=user_id, restaurant_id=restaurant_id)
    if not assignment:
        raise NotFoundError("Assignment not found")
    if assignment.assignment_role == AssignmentRole.OWNER:
        raise PermissionDeniedError("Unauthorized: The owner cannot be removed")

    assignment.is_active = False
    await assignment.save(update_fields=["is_active", "updated_at"])
    return assignment
