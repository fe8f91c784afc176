import pytest

from nextable.core.exceptions import PermissionDeniedError
from nextable.models import AssignmentRole, User, UserRestaurant
from nextable.services.access import (
    MANAGERS,
    ORDER_PLACERS,
    STAFF,
    get_assignment_role,
    require_role,
)


@pytest.mark.asyncio
async def test_owner_role_is_resolved(bistro):
    role = await get_assignment_role(bistro.owner.id, bistro.restaurant.id)
    assert role == AssignmentRole.OWNER


@pytest.mark.asyncio
async def test_unassigned_user_has_no_role(bistro):
    stranger = await User.create(email="stranger@example.com", password_hash="x")

    assert await get_assignment_role(stranger.id, bistro.restaurant.id) is None
    with pytest.raises(PermissionDeniedError):
        await require_role(stranger.id, bistro.restaurant.id, ORDER_PLACERS)


@pytest.mark.asyncio
async def test_inactive_assignment_grants_nothing(bistro):
    waiter = await User.create(email="waiter@example.com", password_hash="x")
    await UserRestaurant.create(
        user=waiter, restaurant=bistro.restaurant, assignment_role=AssignmentRole.WAITER, is_active=False
    )

    assert await get_assignment_role(waiter.id, bistro.restaurant.id) is None


@pytest.mark.asyncio
async def test_chef_may_update_orders_but_not_place_them(bistro):
    chef = await User.create(email="chef@example.com", password_hash="x")
    await UserRestaurant.create(user=chef, restaurant=bistro.restaurant, assignment_role=AssignmentRole.CHEF)

    assert await require_role(chef.id, bistro.restaurant.id, STAFF) == AssignmentRole.CHEF
    with pytest.raises(PermissionDeniedError):
        await require_role(chef.id, bistro.restaurant.id, ORDER_PLACERS)
    with pytest.raises(PermissionDeniedError, match="Owner or manager only"):
        await require_role(chef.id, bistro.restaurant.id, MANAGERS, "Owner or manager only")
