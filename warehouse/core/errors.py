from fastapi import status


class WarehouseError(Exception):
    """
    Base class for domain failures. Each subclass carries the machine-readable
    code and the HTTP status used when it reaches the API layer.
    """
    code = "warehouse_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(WarehouseError):
    """Appointment or referenced inventory item does not exist."""
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidState(WarehouseError):
    """Appointment is terminal or the requested transition is not permitted."""
    code = "invalid_state"
    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(WarehouseError):
    """Concurrent modification detected, or a movement would drive stock negative."""
    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class PersistenceFailure(WarehouseError):
    """The store was unreachable or rejected a write; the unit of work was rolled back."""
    code = "persistence_failure"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
