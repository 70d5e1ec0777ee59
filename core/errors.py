# core/errors.py
from typing import Any


class LibraryError(Exception):
    """Base class for errors raised by the catalog and lending services."""

    code = "LIBRARY_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LibraryError):
    """A referenced Book, User or BorrowRecord does not exist."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(LibraryError):
    """A business rule rejected the operation."""

    code = "CONFLICT"


class ValidationError(LibraryError):
    code = "VALIDATION_FAILED"


class StorageError(LibraryError):
    """The store was unreachable or the transaction could not commit.

    Raised only after the transaction has been rolled back.
    """

    code = "STORAGE_FAILURE"
