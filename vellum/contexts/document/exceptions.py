"""Custom exceptions for the document context."""

from typing import Any, Optional


class PersistenceError(Exception):
    """
    Base exception for draft persistence failures.

    Attributes:
        message: Error description
        slot: Name of the key-value slot involved
        original_error: The underlying error, if any
    """

    def __init__(
        self,
        message: str,
        slot: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.slot = slot
        self.original_error = original_error

        parts = [message]
        if slot:
            parts.append(f"Slot: {slot}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class PersistenceDecodeError(PersistenceError):
    """Stored draft is malformed. Recovered by falling back to the default document."""

    pass


class PersistenceWriteError(PersistenceError):
    """Draft could not be written (quota, unavailable store). In-memory state stays authoritative."""

    pass


class InvalidMutationInput(ValueError):
    """
    Exception raised when a mutation receives input it cannot apply.

    Raised by validation helpers and converted into a no-op at the DocumentStore
    boundary (e.g. unknown template variant, out-of-range skill index).

    Attributes:
        message: Error description
        operation: Name of the rejected operation
        value: The offending value
    """

    def __init__(self, message: str, operation: Optional[str] = None, value: Any = None):
        self.message = message
        self.operation = operation
        self.value = value
        super().__init__(message)


class InvalidDocumentStructureError(ValueError):
    """
    Exception raised when serialized résumé data doesn't conform to the document schema.

    Raised by ResumeDocument.from_dict for missing fields, wrong types, invalid
    template values, or duplicate entry ids.
    """

    pass
