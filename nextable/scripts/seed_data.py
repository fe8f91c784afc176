# nextable/scripts/seed_data.py
import asyncio
import logging

from nextable.core.db import init_db, close_db
from nextable.core.security import hash_password
from nextable.models import AssignmentRole, MenuItem, Restaurant, RestaurantTable, User, UserRestaurant

log = logging.getLogger("seed_data")

DEMO_EMAIL = "owner@nextable.dev"
DEMO_PASSWORD = "changeme"


async def seed():
    owner, _ = await User.get_or_create(
        email=DEMO_EMAIL,
        defaults={"password_hash": hash_password(DEMO_PASSWORD), "first_name": "Demo", "last_name": "Owner"},
    )
    log.info(f"Owner: {owner.id} {DEMO_EMAIL}")

    # Create one restaurant owned by the demo user
    rest, _ = await Restaurant.get_or_create(name="Demo Bistro", defaults={"owner": owner})
    await UserRestaurant.get_or_create(
        user=owner, restaurant=rest, defaults={"assignment_role": AssignmentRole.OWNER}
    )
    log.info(f"Restaurant: {rest.id}")

    for number, capacity in ((1, 2), (2, 4), (3, 6)):
        await RestaurantTable.get_or_create(restaurant=rest, number=number, defaults={"capacity": capacity})

    # Create menu items
    m1, _ = await MenuItem.get_or_create(restaurant=rest, name="Margherita", defaults={"price": "10.00", "category": "Pizza"})
    m2, _ = await MenuItem.get_or_create(restaurant=rest, name="Caesar Salad", defaults={"price": "8.50", "category": "Salads"})
    m3, _ = await MenuItem.get_or_create(
        restaurant=rest, name="Lemonade", defaults={"price": "3.00", "category": "Drinks", "allergens": []}
    )

    log.info(f"Menu items: {m1.id}, {m2.id}, {m3.id}")


async def main():
    await init_db()
    try:
        await seed()
    finally:
        await close_db()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
