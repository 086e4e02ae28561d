from enum import Enum
from tortoise import fields, models


class TransactionDirection(str, Enum):
    IN = "IN"    # Increases stock
    OUT = "OUT"  # Decreases stock


class StockTransaction(models.Model):
    """
    Immutable ledger row for one quantity change of one inventory item.
    stock_after - stock_before always equals the signed quantity.
    """
    id = fields.IntField(primary_key=True)
    # Plain column, not a FK: history must survive the item being deleted
    item_id = fields.IntField()
    item_name = fields.CharField(max_length=255)
    direction = fields.CharEnumField(TransactionDirection, max_length=8)
    quantity = fields.IntField()
    reason = fields.TextField(default="")
    user_id = fields.CharField(max_length=64)
    user_name = fields.CharField(max_length=255)
    user_role = fields.CharField(max_length=64)
    stock_before = fields.IntField()
    stock_after = fields.IntField()
    appointment_id = fields.IntField(null=True)
    timestamp = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "transactions"
        indexes = [
            ("item_id", "timestamp"),
            ("appointment_id",),
        ]

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.direction == TransactionDirection.IN else -self.quantity
