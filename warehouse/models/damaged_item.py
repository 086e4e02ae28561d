from tortoise import fields, models


class DamagedItem(models.Model):
    """
    A damage report raised when an item is marked Damaged. Follow-up status and
    notes are free text maintained by warehouse staff (e.g. "Pending", "Returned to supplier").
    """
    id = fields.IntField(primary_key=True)
    # Plain reference: the report outlives the item record
    item_id = fields.IntField()
    item_name = fields.CharField(max_length=255)
    quantity = fields.IntField(default=0) # On-hand quantity when the damage was reported
    status = fields.CharField(max_length=64, default="Pending")
    notes = fields.TextField(default="")
    reported_by = fields.CharField(max_length=255, default="")
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "damaged_items"
        indexes = [
            ("item_id",),
        ]
