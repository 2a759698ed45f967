"""Domain exceptions for the account lifecycle.

Store adapters and domain services raise these; the lifecycle service
catches them and turns them into outcomes. Each exception carries the
``ErrorKind`` reported back to callers.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported in outcomes."""

    INVALID_CREDENTIALS = "invalid_credentials"
    DUPLICATE_USER = "duplicate_user"
    USER_NOT_FOUND = "user_not_found"
    ALREADY_ACTIVATED = "already_activated"
    ACTIVATION_FAILED = "activation_failed"
    PERSISTENCE_FAILURE = "persistence_failure"


class AccountError(Exception):
    """Base exception for account lifecycle failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(AccountError):
    """Raised when a login identifier or password is missing or malformed."""

    kind = ErrorKind.INVALID_CREDENTIALS


class DuplicateUserError(AccountError):
    """Raised when the login identifier is already registered."""

    kind = ErrorKind.DUPLICATE_USER


class UserNotFoundError(AccountError):
    """Raised when a user id or login does not resolve."""

    kind = ErrorKind.USER_NOT_FOUND


class AlreadyActivatedError(AccountError):
    """Raised when activating or resending for an active user."""

    kind = ErrorKind.ALREADY_ACTIVATED


class ActivationFailedError(AccountError):
    """Raised when an activation code does not match."""

    kind = ErrorKind.ACTIVATION_FAILED


class PersistenceError(AccountError):
    """Raised when the credential store rejects a write."""

    kind = ErrorKind.PERSISTENCE_FAILURE
