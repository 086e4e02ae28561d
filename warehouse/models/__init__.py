# warehouse/models/__init__.py
from .inventory import InventoryItem, Supplier, Category, DamagedStatus
from .appointment import Appointment, AppointmentStatus
from .ledger import StockTransaction, TransactionDirection
from .activity_log import ActivityLog
from .damaged_item import DamagedItem

# Export all models
__all__ = [
    "InventoryItem",
    "Supplier",
    "Category",
    "DamagedStatus",
    "Appointment",
    "AppointmentStatus",
    "StockTransaction",
    "TransactionDirection",
    "ActivityLog",
    "DamagedItem",
]
