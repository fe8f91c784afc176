from decimal import Decimal
from types import SimpleNamespace

import pytest_asyncio

from nextable.core.db import close_db, init_db
from nextable.models import AssignmentRole, MenuItem, Restaurant, RestaurantTable, User, UserRestaurant


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with all tables created."""
    await init_db(db_url="sqlite://:memory:")
    yield
    await close_db()


@pytest_asyncio.fixture
async def bistro(db):
    """
    A restaurant with an owner, one table, an available item A (10.00)
    and an unavailable item B (5.50).
    """
    owner = await User.create(email="owner@example.com", password_hash="not-a-hash")
    restaurant = await Restaurant.create(name="Bistro", owner=owner)
    await UserRestaurant.create(user=owner, restaurant=restaurant, assignment_role=AssignmentRole.OWNER)
    table = await RestaurantTable.create(restaurant=restaurant, number=1, capacity=4)
    item_a = await MenuItem.create(
        restaurant=restaurant, name="Lasagna", price=Decimal("10.00"), category="Mains"
    )
    item_b = await MenuItem.create(
        restaurant=restaurant, name="Tiramisu", price=Decimal("5.50"), category="Desserts", is_available=False
    )
    return SimpleNamespace(owner=owner, restaurant=restaurant, table=table, item_a=item_a, item_b=item_b)
