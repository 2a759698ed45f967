"""Throttle record entity.

Tracks failed login attempts, suspension and ban state for a single user.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ThrottleRecord:
    """Per-user throttle state.

    A ban is terminal: once ``banned_at`` is set nothing in the normal flow
    clears it.

    Attributes:
        user_id: ID of the user this record belongs to.
        failed_attempts: Consecutive failed login attempts.
        last_attempt_at: When the last failed attempt was recorded.
        suspended_until: End of the current suspension, if any.
        banned_at: When the user was banned, if ever.
    """

    user_id: str
    failed_attempts: int = 0
    last_attempt_at: datetime | None = None
    suspended_until: datetime | None = None
    banned_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("User ID is required")
        if self.failed_attempts < 0:
            raise ValueError("Failed attempts cannot be negative")

    def is_suspended_at(self, now: datetime) -> bool:
        """Check whether a suspension is in force at ``now``."""
        return self.suspended_until is not None and self.suspended_until > now

    @property
    def is_banned(self) -> bool:
        return self.banned_at is not None
