"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


class NotFoundError(DomainError):
    """Raised when the target entity does not exist."""


class DuplicateIdentityError(DomainError):
    """Raised when a username or email is already registered."""


class InvalidStateError(DomainError):
    """Raised when an operation does not fit the entity's current state (e.g. clocking in twice)."""
