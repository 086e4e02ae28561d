from enum import Enum
from tortoise import fields, models


class AppointmentStatus(str, Enum):
    PENDING = "pending"      # Initial state after scheduling
    CONFIRMED = "confirmed"  # Supplier acknowledged the slot
    COMPLETED = "completed"  # Goods received, stock applied (terminal)
    CANCELLED = "cancelled"  # Called off, no stock effect (terminal)


TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})

ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING: frozenset(
        {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED}
    ),
    AppointmentStatus.CONFIRMED: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[AppointmentStatus(current)]


class Appointment(models.Model):
    id = fields.IntField(primary_key=True)
    supplier_id = fields.IntField()
    # Snapshot of the supplier name at scheduling time
    supplier_name = fields.CharField(max_length=255)
    date = fields.DateField()
    # "HH:MM" or "HH:MM:SS"; zero-padded so text order is chronological
    time = fields.CharField(max_length=8)
    status = fields.CharEnumField(AppointmentStatus, default=AppointmentStatus.PENDING)
    # Ordered list of {"item_id", "item_name", "quantity"}; see schemas.appointment.LineItem
    items = fields.JSONField(default=list)
    notes = fields.TextField(default="")
    scheduled_by = fields.CharField(max_length=255, default="")
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "appointments"
        indexes = [
            ("status",),
            ("date", "time"),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
