import pytest

from nextable.core.exceptions import BadRequestError, ConflictError, NotFoundError
from nextable.models import Restaurant, TableStatus, User
from nextable.services.table_service import (
    create_table,
    get_visible_table,
    list_restaurant_tables,
    list_visible_tables,
    update_table,
)


@pytest.mark.asyncio
async def test_new_tables_start_available(bistro):
    table = await create_table(bistro.restaurant.id, number=2, capacity=6, location="patio")

    assert table.status == TableStatus.AVAILABLE
    numbers = [t.number for t in await list_restaurant_tables(bistro.restaurant.id)]
    assert numbers == [1, 2]


@pytest.mark.asyncio
async def test_duplicate_table_number_conflicts(bistro):
    with pytest.raises(ConflictError):
        await create_table(bistro.restaurant.id, number=1, capacity=2)


@pytest.mark.asyncio
async def test_status_update(bistro):
    table = await update_table(bistro.table, {"status": TableStatus.OCCUPIED})
    assert table.status == TableStatus.OCCUPIED
    assert table.capacity == 4

    with pytest.raises(BadRequestError):
        await update_table(bistro.table, {})


@pytest.mark.asyncio
async def test_tables_visible_only_through_assignment(bistro):
    stranger = await User.create(email="stranger@example.com", password_hash="x")
    other = await Restaurant.create(name="Elsewhere")
    await create_table(other.id, number=9, capacity=2)

    visible = await list_visible_tables(bistro.owner.id)
    assert [t.id for t in visible] == [bistro.table.id]
    assert (await get_visible_table(bistro.table.id, bistro.owner.id)).number == 1
    with pytest.raises(NotFoundError):
        await get_visible_table(bistro.table.id, stranger.id)
