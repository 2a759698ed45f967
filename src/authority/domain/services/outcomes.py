"""Outcome types returned by the account lifecycle service.

Every lifecycle operation answers with a success flag and a message fit for
display. Failed outcomes also carry the ``ErrorKind`` that caused them.
"""

from dataclasses import dataclass, field
from enum import Enum

from authority.domain.exceptions import AccountError, ErrorKind


class UserStatus(str, Enum):
    """Display status of a user in listings."""

    ACTIVE = "Active"
    NOT_ACTIVE = "Not Active"
    SUSPENDED = "Suspended"
    BANNED = "Banned"


def derive_status(activated: bool, suspended: bool, banned: bool) -> UserStatus:
    """Derive the listing status of a user.

    Priority: Banned, then Suspended, then Active / Not Active.
    """
    if banned:
        return UserStatus.BANNED
    if suspended:
        return UserStatus.SUSPENDED
    return UserStatus.ACTIVE if activated else UserStatus.NOT_ACTIVE


@dataclass(frozen=True)
class Outcome:
    """Result of a lifecycle operation.

    Attributes:
        success: Whether the operation succeeded.
        message: Human-readable message for display.
        error: Kind of failure, None on success.
    """

    success: bool
    message: str
    error: ErrorKind | None = None

    @classmethod
    def ok(cls, message: str, **extra) -> "Outcome":
        return cls(success=True, message=message, **extra)

    @classmethod
    def failed(cls, error: AccountError) -> "Outcome":
        return cls(success=False, message=error.message, error=error.kind)


@dataclass(frozen=True)
class RegistrationOutcome(Outcome):
    user_id: str | None = None


@dataclass(frozen=True)
class UpdateOutcome(Outcome):
    added_group_ids: frozenset[str] = field(default_factory=frozenset)
    removed_group_ids: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ActivationOutcome(Outcome):
    pass


@dataclass(frozen=True)
class ResendOutcome(Outcome):
    pass


@dataclass(frozen=True)
class UserView:
    """Read-only projection of a user for listings."""

    id: str
    email: str
    first_name: str | None
    last_name: str | None
    activated: bool
    status: UserStatus
    group_ids: frozenset[str]
