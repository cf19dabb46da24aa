"""Error types for LiftLog stores.

NotFoundError and ValidationError are caller-visible business errors.
StorageError wraps engine failures behind a generic message; the original
exception is logged and chained, never shown to the caller.
"""


class LiftLogError(Exception):
    """Base exception for LiftLog errors."""

    pass


class NotFoundError(LiftLogError):
    """Raised when a row is absent or not owned by the caller.

    Rows owned by other users are reported exactly like missing rows.
    """

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ValidationError(LiftLogError):
    """Raised when required input is missing or unusable."""

    pass


class StorageError(LiftLogError):
    """Raised when the underlying database fails."""

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(message)


class CorruptDocumentError(StorageError):
    """Raised when a stored document cannot be decoded."""

    def __init__(self) -> None:
        super().__init__("Stored document is corrupt")
