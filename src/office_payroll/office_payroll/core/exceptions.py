class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the database rejects a read or a write."""


class DuplicateRecordError(StoreError):
    """Raised when an insert violates a unique key."""
