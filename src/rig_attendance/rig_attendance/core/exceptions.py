class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee/record does not exist or nothing is eligible."""


class StorageError(DomainError):
    """Raised when the underlying store fails to read or write."""


class ExportTimeoutError(DomainError):
    """Raised when building an export document exceeds its time budget."""


class CorruptDataWarning(UserWarning):
    """Emitted when a stored day map cannot be decoded and is replaced by an empty map."""
