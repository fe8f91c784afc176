from enum import Enum
from tortoise import fields, models


class OrderStatus(str, Enum):
    PENDING = "pending"  # Initial state after placement
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    CANCELLED = "cancelled"
    PAID = "paid"


class Order(models.Model):
    id = fields.IntField(primary_key=True)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="orders", on_delete=fields.CASCADE)
    placed_by = fields.ForeignKeyField(
        "models.User", related_name="orders", null=True, on_delete=fields.SET_NULL
    )
    table = fields.ForeignKeyField(
        "models.RestaurantTable", related_name="orders", null=True, on_delete=fields.SET_NULL
    )
    status = fields.CharEnumField(OrderStatus, default=OrderStatus.PENDING)
    total = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = fields.TextField(null=True)
    estimated_ready = fields.DatetimeField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "orders"
        indexes = [
            ("restaurant_id",),          # Restaurant order queries
            ("status",),                 # Status-based filtering
            ("restaurant_id", "table_id"),  # Orders for a table
            ("created_at",),             # Time-based queries
        ]


class OrderItem(models.Model):
    id = fields.IntField(primary_key=True)
    order = fields.ForeignKeyField("models.Order", related_name="items", on_delete=fields.CASCADE)
    menu_item = fields.ForeignKeyField(
        "models.MenuItem", related_name="order_items", null=True, on_delete=fields.SET_NULL
    )
    quantity = fields.IntField()
    # Snapshot of MenuItem.price when the line was inserted
    price_at_order = fields.DecimalField(max_digits=10, decimal_places=2)
    notes = fields.TextField(null=True)

    class Meta:
        table = "order_items"
        indexes = [
            ("order_id",),              # Order line items
            ("menu_item_id",),          # Menu item popularity
        ]
