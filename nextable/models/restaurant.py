from enum import Enum
from tortoise import fields, models


class AssignmentRole(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"
    WAITER = "waiter"
    CHEF = "chef"
    CUSTOMER = "customer"


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"


class Restaurant(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    address = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=32, null=True)
    description = fields.TextField(null=True)
    owner = fields.ForeignKeyField(
        "models.User", related_name="owned_restaurants", null=True, on_delete=fields.SET_NULL
    )
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "restaurants"


class UserRestaurant(models.Model):
    """
    A user's assignment role on one restaurant. Only active assignments
    grant access.
    """
    id = fields.IntField(primary_key=True)
    user = fields.ForeignKeyField("models.User", related_name="assignments", on_delete=fields.CASCADE)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="assignments", on_delete=fields.CASCADE)
    assignment_role = fields.CharEnumField(AssignmentRole)
    is_active = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "user_restaurants"
        unique_together = (("user", "restaurant"),)
        indexes = [
            ("user_id", "restaurant_id", "is_active"),  # Access checks
        ]


class RestaurantTable(models.Model):
    id = fields.IntField(primary_key=True)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="tables", on_delete=fields.CASCADE)
    number = fields.IntField()
    status = fields.CharEnumField(TableStatus, default=TableStatus.AVAILABLE)
    capacity = fields.IntField()
    location = fields.CharField(max_length=100, null=True)
    notes = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "restaurant_tables"
        unique_together = (("restaurant", "number"),)
