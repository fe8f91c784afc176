import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from nextable.core.exceptions import BadRequestError, NotFoundError
from nextable.models.menu import MenuItem

log = logging.getLogger(__name__)

# Columns that may not be cleared through a partial update
_NON_NULLABLE = ("name", "price", "category", "is_available", "allergens", "modifiers")


async def list_menu_items(restaurant_id: int, category: Optional[str] = None) -> List[MenuItem]:
    """Available items of the restaurant, optionally filtered by a category substring."""
    query = MenuItem.filter(restaurant_id=restaurant_id, is_available=True)
    if category:
        query = query.filter(category__icontains=category)
    return await query.order_by("category", "name")


async def get_menu_item(menu_item_id: int, restaurant_id: int) -> MenuItem:
    item = await MenuItem.get_or_none(id=menu_item_id, restaurant_id=restaurant_id)
    if not item:
        raise NotFoundError("Menu item not found")
    return item


async def find_orderable_item(menu_item_id: int, restaurant_id: int, conn=None) -> Optional[MenuItem]:
    """The menu item if it belongs to the restaurant and is available, else None."""
    return await MenuItem.get_or_none(
        id=menu_item_id, restaurant_id=restaurant_id, is_available=True, using_db=conn
    )


async def create_menu_item(
    restaurant_id: int,
    name: str,
    price: Decimal,
    category: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    allergens: Optional[List[str]] = None,
    modifiers: Optional[Dict[str, Any]] = None,
) -> MenuItem:
    if price < 0:
        raise BadRequestError("Price must be non-negative")

    item = await MenuItem.create(
        restaurant_id=restaurant_id,
        name=name,
        price=price,
        category=category,
        description=description,
        image_url=image_url,
        is_available=True,
        allergens=allergens or [],
        modifiers=modifiers or {},
    )
    log.info(f"Menu item {item.id} added to restaurant {restaurant_id}")
    return item


async def update_menu_item(menu_item_id: int, restaurant_id: int, changes: Dict) -> MenuItem:
    """
    Applies exactly the fields present in ``changes``. Falsy values such as
    a price of 0 or an empty description are kept, not treated as missing.
    """
    if not changes:
        raise BadRequestError("At least one field required")
    for field in _NON_NULLABLE:
        if field in changes and changes[field] is None:
            raise BadRequestError(f"{field} cannot be null")
    if "price" in changes and changes["price"] < 0:
        raise BadRequestError("Price must be non-negative")

    item = await get_menu_item(menu_item_id, restaurant_id)
    item.update_from_dict(changes)
    await item.save(update_fields=[*changes.keys(), "updated_at"])
    return item


async def delete_menu_item(menu_item_id: int, restaurant_id: int) -> None:
    deleted = await MenuItem.filter(id=menu_item_id, restaurant_id=restaurant_id).delete()
    if not deleted:
        raise NotFoundError("Menu item not found")
