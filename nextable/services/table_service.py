import logging
from typing import Dict, List, Optional

from tortoise.exceptions import IntegrityError

from nextable.core.exceptions import BadRequestError, ConflictError, NotFoundError
from nextable.models.restaurant import RestaurantTable, TableStatus

log = logging.getLogger(__name__)


async def list_visible_tables(user_id: int, restaurant_id: Optional[int] = None) -> List[RestaurantTable]:
    """Tables of every restaurant the user is actively assigned to."""
    query = RestaurantTable.filter(
        restaurant__assignments__user_id=user_id,
        restaurant__assignments__is_active=True,
    )
    if restaurant_id is not None:
        query = query.filter(restaurant_id=restaurant_id)
    return await query.order_by("number").distinct()


async def list_restaurant_tables(restaurant_id: int) -> List[RestaurantTable]:
    return await RestaurantTable.filter(restaurant_id=restaurant_id).order_by("number")


async def get_visible_table(table_id: int, user_id: int) -> RestaurantTable:
    table = await RestaurantTable.filter(
        id=table_id,
        restaurant__assignments__user_id=user_id,
        restaurant__assignments__is_active=True,
    ).first()
    if not table:
        raise NotFoundError("Table not found or access denied")
    return table


async def get_table(table_id: int) -> RestaurantTable:
    table = await RestaurantTable.get_or_none(id=table_id)
    if not table:
        raise NotFoundError("Table not found")
    return table


async def find_restaurant_table(table_id: int, restaurant_id: int, conn=None) -> Optional[RestaurantTable]:
    """The table if it belongs to the restaurant, else None."""
    return await RestaurantTable.get_or_none(id=table_id, restaurant_id=restaurant_id, using_db=conn)


async def create_table(
    restaurant_id: int,
    number: int,
    capacity: int,
    location: Optional[str] = None,
    notes: Optional[str] = None,
) -> RestaurantTable:
    try:
        table = await RestaurantTable.create(
            restaurant_id=restaurant_id,
            number=number,
            capacity=capacity,
            location=location,
            notes=notes,
            status=TableStatus.AVAILABLE,
        )
    except IntegrityError:
        raise ConflictError("Table number already exists in this restaurant")
    log.info(f"Table {table.number} added to restaurant {restaurant_id}")
    return table


async def update_table(table: RestaurantTable, changes: Dict) -> RestaurantTable:
    if not changes:
        raise BadRequestError("At least one field required")
    for required in ("number", "capacity", "status"):
        if required in changes and changes[required] is None:
            raise BadRequestError(f"{required} cannot be null")

    table.update_from_dict(changes)
    try:
        await table.save(update_fields=[*changes.keys(), "updated_at"])
    except IntegrityError:
        raise ConflictError("Table number already exists in this restaurant")
    return table


async def delete_table(table_id: int) -> None:
    deleted = await RestaurantTable.filter(id=table_id).delete()
    if not deleted:
        raise NotFoundError("Table not found")
