"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist in the local state."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RemoteStoreError(Exception):
    """Raised when a remote store operation fails.

    Backend-agnostic — the SQLAlchemy adapter wraps driver errors in it so the
    reconciliation layer only has to catch one type.
    """

    def __init__(self, operation: str, table: str, message: str):
        self.operation = operation
        self.table = table
        self.message = message
        super().__init__(f"[{table}] {operation} failed: {message}")


class CacheError(Exception):
    """Raised when the local snapshot cannot be written."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Cache write to '{path}' failed: {message}")
