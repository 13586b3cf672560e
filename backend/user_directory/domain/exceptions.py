"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ValidationError(Exception):
    """Raised when a form draft fails validation, before any store call.

    Always recoverable: the caller re-prompts with the draft untouched.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(Exception):
    """Raised when the document store cannot be reached or rejects the call."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"[{operation}] {message}")


class PersistenceError(Exception):
    """Raised when a create, update or delete could not be persisted.

    The in-memory record list is left exactly as it was before the call.
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not {operation} user record{detail}")
