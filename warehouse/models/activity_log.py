from tortoise import fields, models


class ActivityLog(models.Model):
    """Append-only audit trail. Informational only, never read back by domain logic."""
    id = fields.IntField(primary_key=True)
    item_name = fields.CharField(max_length=255)
    action = fields.CharField(max_length=64) # e.g. 'Appointment Completed'
    user_id = fields.CharField(max_length=64, default="")
    user_name = fields.CharField(max_length=255, default="")
    user_role = fields.CharField(max_length=64, default="")
    details = fields.TextField(default="")
    timestamp = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "activity_logs"
