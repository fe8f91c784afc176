"""
Restaurant-level authorization.

Every restaurant-scoped route resolves the caller's active assignment role
once, here, and checks it against one of the allow-lists below before the
service layer runs.
"""
from typing import Collection, Optional

from nextable.core.exceptions import PermissionDeniedError
from nextable.models.restaurant import AssignmentRole, UserRestaurant

ALL_ROLES = frozenset(AssignmentRole)
ORDER_PLACERS = frozenset({
    AssignmentRole.OWNER, AssignmentRole.MANAGER, AssignmentRole.WAITER, AssignmentRole.CUSTOMER,
})
STAFF = frozenset({
    AssignmentRole.OWNER, AssignmentRole.MANAGER, AssignmentRole.WAITER, AssignmentRole.CHEF,
})
MANAGERS = frozenset({AssignmentRole.OWNER, AssignmentRole.MANAGER})
OWNERS = frozenset({AssignmentRole.OWNER})


async def get_assignment_role(user_id: int, restaurant_id: int) -> Optional[AssignmentRole]:
    """Returns the user's active role on the restaurant, or None."""
    assignment = await UserRestaurant.get_or_none(
        user_id=user_id, restaurant_id=restaurant_id, is_active=True
    )
    if not assignment:
        return None
    return AssignmentRole(assignment.assignment_role)


async def require_role(
    user_id: int,
    restaurant_id: int,
    allowed: Collection[AssignmentRole],
    message: str = "Access to restaurant denied",
) -> AssignmentRole:
    role = await get_assignment_role(user_id, restaurant_id)
    if role is None or role not in allowed:
        raise PermissionDeniedError(f"Unauthorized: {message}")
    return role
