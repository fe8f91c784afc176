import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from nextable.core.exceptions import (
    BadRequestError,
    EmptyItemList,
    InvalidLineItem,
    NotFoundError,
    OrderPlacementError,
    TableMismatch,
    TransactionFailure,
)
from nextable.models.order import Order, OrderItem, OrderStatus
from nextable.services.menu_service import find_orderable_item
from nextable.services.table_service import find_restaurant_table

log = logging.getLogger(__name__)

ORDER_RELATIONS = ("placed_by", "table")
ORDER_DETAIL_RELATIONS = (*ORDER_RELATIONS, "items", "items__menu_item")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


async def place_order(
    restaurant_id: int,
    user_id: int,
    table_id: Optional[int],
    items: Sequence[Mapping[str, Any]],
    notes: Optional[str] = None,
) -> Order:
    """
    Creates the Order and its OrderItems atomically.

    Each line's price is read from the menu inside the transaction and
    snapshotted onto the OrderItem; the order total is the sum of those
    line totals. Any invalid line rolls back everything written so far.
    """
    if not items:
        raise EmptyItemList()

    try:
        async with in_transaction() as conn:
            if table_id is not None:
                table = await find_restaurant_table(table_id, restaurant_id, conn)
                if not table:
                    raise TableMismatch(table_id, restaurant_id)

            # 1. Create the Order header with a placeholder total
            order = await Order.create(
                restaurant_id=restaurant_id,
                placed_by_id=user_id,
                table_id=table_id,
                status=OrderStatus.PENDING,
                total=Decimal("0"),
                notes=notes,
                using_db=conn,
            )

            total = Decimal("0")
            for line in items:
                menu_item_id = line.get("menu_item_id")
                qty = line.get("quantity")

                if not _is_positive_int(qty):
                    raise InvalidLineItem(
                        f"Invalid quantity {qty!r} for menu item {menu_item_id}: must be a positive integer.",
                        menu_item_id=menu_item_id,
                        quantity=qty,
                    )

                menu = await find_orderable_item(menu_item_id, restaurant_id, conn)
                if not menu:
                    raise InvalidLineItem(
                        f"Menu item {menu_item_id} not found or unavailable.",
                        menu_item_id=menu_item_id,
                        quantity=qty,
                    )

                total += menu.price * qty

                # 2. Create Order Item line with the price snapshot
                await OrderItem.create(
                    order=order,
                    menu_item=menu,
                    quantity=qty,
                    price_at_order=menu.price,
                    notes=line.get("notes"),
                    using_db=conn,
                )

            order.total = total
            await order.save(update_fields=["total", "updated_at"], using_db=conn)
    except OrderPlacementError as e:
        log.warning(f"Order rejected for restaurant {restaurant_id}: {e.message}")
        raise
    except BaseORMException as e:
        log.error(f"Order transaction failed for restaurant {restaurant_id}: {e}")
        raise TransactionFailure(f"Order could not be saved: {e}") from e

    log.info(f"Order {order.id} placed for restaurant {restaurant_id}, total {total}")
    return await get_order(order.id, restaurant_id)


async def get_order(order_id: int, restaurant_id: int) -> Order:
    """Fetches the order with its items and their menu items."""
    # Pre-fetch related entities to minimize DB queries (N+1 avoidance)
    order = await Order.get_or_none(id=order_id, restaurant_id=restaurant_id).prefetch_related(
        *ORDER_DETAIL_RELATIONS
    )
    if not order:
        raise NotFoundError("Order not found")
    return order


async def list_orders(restaurant_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
    query = Order.filter(restaurant_id=restaurant_id)
    if status is not None:
        query = query.filter(status=status)
    return await query.order_by("-created_at").prefetch_related(*ORDER_RELATIONS)


async def list_table_orders(
    restaurant_id: int, table_id: int, status: Optional[OrderStatus] = None
) -> List[Order]:
    if not await find_restaurant_table(table_id, restaurant_id):
        raise NotFoundError("Table not found in this restaurant")

    query = Order.filter(restaurant_id=restaurant_id, table_id=table_id)
    if status is not None:
        query = query.filter(status=status)
    return await query.order_by("-created_at").prefetch_related(*ORDER_RELATIONS)


async def update_order(order_id: int, restaurant_id: int, changes: Dict) -> Order:
    """Applies the status/notes/estimated_ready fields present in ``changes``."""
    if not changes:
        raise BadRequestError("At least one field required")
    if "status" in changes and changes["status"] is None:
        raise BadRequestError("status cannot be null")

    order = await Order.get_or_none(id=order_id, restaurant_id=restaurant_id)
    if not order:
        raise NotFoundError("Order not found")

    order.update_from_dict(changes)
    await order.save(update_fields=[*changes.keys(), "updated_at"])
    log.info(f"Order {order_id} updated: {sorted(changes)}")
    return await get_order(order_id, restaurant_id)


async def delete_order(order_id: int, restaurant_id: int) -> None:
    async with in_transaction() as conn:
        order = await Order.get_or_none(id=order_id, restaurant_id=restaurant_id, using_db=conn)
        if not order:
            raise NotFoundError("Order not found")
        await OrderItem.filter(order_id=order_id).using_db(conn).delete()
        await order.delete(using_db=conn)
    log.info(f"Order {order_id} deleted")
