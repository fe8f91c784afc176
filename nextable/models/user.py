from enum import Enum
from tortoise import fields, models


class UserRole(str, Enum):
    CUSTOMER = "customer"
    WAITER = "waiter"
    CHEF = "chef"
    ADMIN = "admin"  # May update or delete any account


class User(models.Model):
    id = fields.IntField(primary_key=True)
    email = fields.CharField(max_length=255, unique=True)
    password_hash = fields.CharField(max_length=128)
    first_name = fields.CharField(max_length=100, null=True)
    last_name = fields.CharField(max_length=100, null=True)
    role = fields.CharEnumField(UserRole, default=UserRole.CUSTOMER)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "users"

    def __str__(self):
        return self.email
