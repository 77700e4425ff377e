"""Security-layer exceptions. Typed, no HTTP."""

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
INSUFFICIENT_PERMISSIONS_MESSAGE = "Insufficient permissions"


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthenticatedError(SecurityError):
    """Raised when a request carries no token, or a malformed, forged or expired one."""


class InsufficientPermissionsError(SecurityError):
    """Raised when the identity's role or ownership does not permit the operation."""

    def __init__(self, message: str = INSUFFICIENT_PERMISSIONS_MESSAGE) -> None:
        super().__init__(message)


class InvalidCredentialsError(SecurityError):
    """Raised at login for an unknown username or a wrong password."""

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE) -> None:
        super().__init__(message)


class AccountDeactivatedError(InvalidCredentialsError):
    """Raised at login for a deactivated account. Carries the same public message as a bad password."""
