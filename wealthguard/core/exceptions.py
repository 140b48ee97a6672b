"""Custom exception classes for the authorization core."""

from typing import List, Optional


class WealthGuardError(Exception):
    """Base exception for WealthGuard."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthorizationError(WealthGuardError):
    """Raised when an actor attempts an operation it is not allowed to perform."""
    pass


class ResourceNotFoundError(WealthGuardError):
    """Raised when a requested account is not found."""
    pass


class ValidationError(WealthGuardError):
    """Raised when input validation fails."""
    pass


class PartialGrantUpdateError(WealthGuardError):
    """Raised when a bulk grant update stops part way through.

    Grants for ``applied`` targets have already been written and stay
    written; ``pending`` targets still hold their previous action set.
    """

    def __init__(
        self,
        message: str,
        applied: Optional[List[str]] = None,
        pending: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.applied = list(applied or [])
        self.pending = list(pending or [])
