class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed or out of range."""


class NotFoundError(DomainError):
    """Raised when a referenced employee does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class ConflictError(DomainError):
    """Raised when an operation violates the attendance session state.

    This is an expected outcome (already checked in, nothing to check out),
    not an internal failure.
    """


class RepositoryError(DomainError):
    """Raised when the persistence layer fails or times out."""
