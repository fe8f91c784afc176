from decimal import Decimal

import pytest

from nextable.core.exceptions import BadRequestError, NotFoundError
from nextable.services.menu_service import (
    create_menu_item,
    delete_menu_item,
    find_orderable_item,
    list_menu_items,
    update_menu_item,
)


@pytest.mark.asyncio
async def test_listing_hides_unavailable_items(bistro):
    items = await list_menu_items(bistro.restaurant.id)
    assert [i.name for i in items] == ["Lasagna"]


@pytest.mark.asyncio
async def test_category_filter_is_case_insensitive(bistro):
    await create_menu_item(bistro.restaurant.id, "Espresso", Decimal("2.50"), "Hot Drinks")

    items = await list_menu_items(bistro.restaurant.id, category="drink")
    assert [i.name for i in items] == ["Espresso"]


@pytest.mark.asyncio
async def test_zero_price_is_applied_not_ignored(bistro):
    item = await update_menu_item(bistro.item_a.id, bistro.restaurant.id, {"price": Decimal("0")})

    assert item.price == Decimal("0")
    assert item.name == "Lasagna"


@pytest.mark.asyncio
async def test_update_rejects_empty_and_null_changes(bistro):
    with pytest.raises(BadRequestError):
        await update_menu_item(bistro.item_a.id, bistro.restaurant.id, {})
    with pytest.raises(BadRequestError):
        await update_menu_item(bistro.item_a.id, bistro.restaurant.id, {"price": None})
    with pytest.raises(BadRequestError):
        await update_menu_item(bistro.item_a.id, bistro.restaurant.id, {"price": Decimal("-1")})


@pytest.mark.asyncio
async def test_availability_controls_orderability(bistro):
    assert await find_orderable_item(bistro.item_b.id, bistro.restaurant.id) is None

    await update_menu_item(bistro.item_b.id, bistro.restaurant.id, {"is_available": True})

    item = await find_orderable_item(bistro.item_b.id, bistro.restaurant.id)
    assert item.price == Decimal("5.50")


@pytest.mark.asyncio
async def test_delete_unknown_item(bistro):
    with pytest.raises(NotFoundError):
        await delete_menu_item(9999, bistro.restaurant.id)
