"""Business-rule errors raised by the inventory services.

Routes translate these to HTTP responses; nothing in the service layer
retries or swallows them.
"""


class InventoryError(Exception):
    """Base class for inventory rule violations."""


class ValidationError(InventoryError):
    """Raised when an input field violates a constraint."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")


class NotFoundError(InventoryError):
    """Raised when a referenced category or product does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ConflictError(InventoryError):
    """Raised when an operation would break a referential invariant."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
