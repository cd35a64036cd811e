class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AlreadyCheckedIn(DomainError):
    """A record for this user and day already exists."""

    def __init__(self, message: str = "You have already checked in today"):
        super().__init__(message)


class NoActiveCheckIn(DomainError):
    """No open check-in for this user and day."""

    def __init__(self, message: str = "Please check in first"):
        super().__init__(message)


class StoreError(Exception):
    """Base exception raised by record store adapters."""


class ConstraintViolation(StoreError):
    """Write rejected by a store constraint (foreign key, check, unique key)."""


class UniqueConstraintViolation(ConstraintViolation):
    """Insert collided with a unique key."""


class NotFound(StoreError):
    """Updated row does not exist (or no longer matches the update condition)."""


class StoreUnavailable(StoreError):
    """Any I/O failure talking to the record store."""
