from tortoise import fields, models


class MenuItem(models.Model):
    id = fields.IntField(primary_key=True)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="menu_items", on_delete=fields.CASCADE)
    name = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    price = fields.DecimalField(max_digits=10, decimal_places=2)
    category = fields.CharField(max_length=100)
    image_url = fields.CharField(max_length=500, null=True)
    is_available = fields.BooleanField(default=True)
    allergens = fields.JSONField(default=list)
    modifiers = fields.JSONField(default=dict)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "menu_items"
        indexes = [
            ("restaurant_id", "is_available"),  # Composite: restaurant's orderable items
            ("category",),
        ]
