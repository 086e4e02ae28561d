from enum import Enum
from tortoise import fields, models


class DamagedStatus(str, Enum):
    GOOD = "Good"
    DAMAGED = "Damaged"


class Supplier(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    contact_person = fields.CharField(max_length=255, default="")
    contact_email = fields.CharField(max_length=255, default="")
    contact_phone = fields.CharField(max_length=64, default="")
    address = fields.TextField(default="")
    is_active = fields.BooleanField(default=True)

    class Meta:
        table = "suppliers"
        indexes = [
            ("is_active",),
        ]


class Category(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=128, unique=True)
    description = fields.TextField(default="")

    class Meta:
        table = "categories"


class InventoryItem(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    # Free-text reference to Category.name, kept as-is when a category is removed
    category = fields.CharField(max_length=128, default="")
    quantity = fields.IntField(default=0)
    reorder_level = fields.IntField(default=10) # For low stock alert
    unit_price = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    location = fields.CharField(max_length=255, default="")
    damaged_status = fields.CharEnumField(DamagedStatus, max_length=16, default=DamagedStatus.GOOD)
    supplier = fields.ForeignKeyField(
        "models.Supplier", related_name="items", null=True, on_delete=fields.SET_NULL
    )
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "inventory_items"
        indexes = [
            ("category",),
            ("supplier_id",),
        ]

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_level
