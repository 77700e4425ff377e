"""Governance-layer exceptions. Typed, no HTTP."""


class GovernanceError(Exception):
    """Base for all governance-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuditWriteError(GovernanceError):
    """Raised by an audit repository when a record cannot be persisted. Never reaches API callers."""
