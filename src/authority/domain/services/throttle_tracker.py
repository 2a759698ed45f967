"""Throttle tracking for failed logins, suspensions and bans.

Each user moves forward along Clear -> Suspended -> Banned as failed login
attempts accumulate. A suspension expires on its own; a ban never does.
Failed attempts are forgotten once the suspension time passes without
another attempt, or once the suspension they caused has run out.
Reads never write: an expired suspension is reported as not suspended
without the record being touched, and a user without a record reads as
clear without one being created.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

from authority.core.config import Settings, get_settings
from authority.core.logging import get_logger
from authority.domain.entities import ThrottleRecord
from authority.domain.interfaces import ThrottleStore

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ThrottleTracker:
    """Reads and updates per-user throttle state."""

    def __init__(
        self,
        store: ThrottleStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the tracker.

        Args:
            store: Persistence for throttle records.
            settings: Throttle limits; loaded from the environment if omitted.
            clock: Source of the current time (timezone-aware).
        """
        settings = settings or get_settings()
        self.store = store
        self.clock = clock
        self.enabled = settings.throttle_enabled
        self.attempt_limit = settings.throttle_attempt_limit
        self.ban_attempt_limit = settings.throttle_ban_attempt_limit
        self.suspension_time = timedelta(minutes=settings.throttle_suspension_minutes)

    async def find_by_user_id(self, user_id: str) -> ThrottleRecord:
        """Get the throttle record of a user.

        Returns an unsaved clear record if none exists yet.
        """
        record = await self.store.get(user_id)
        return record if record is not None else ThrottleRecord(user_id=user_id)

    async def is_suspended(self, user_id: str) -> bool:
        if not self.enabled:
            return False
        record = await self.store.get(user_id)
        return record is not None and record.is_suspended_at(self.clock())

    async def is_banned(self, user_id: str) -> bool:
        if not self.enabled:
            return False
        record = await self.store.get(user_id)
        return record is not None and record.is_banned

    def _attempts_expired(self, record: ThrottleRecord, now: datetime) -> bool:
        """Whether earlier attempts no longer count towards the limits."""
        if record.suspended_until is not None and record.suspended_until <= now:
            return True
        return (
            record.last_attempt_at is not None
            and record.last_attempt_at + self.suspension_time <= now
        )

    async def add_login_attempt(self, user_id: str) -> ThrottleRecord:
        """Record a failed login attempt.

        Attempts older than the suspension time, or made before an expired
        suspension, are forgotten before counting. Suspends the user when the
        attempt limit is reached and bans the user when the ban limit is
        reached.
        """
        record = await self.find_by_user_id(user_id)
        if not self.enabled or record.is_banned:
            return record

        now = self.clock()
        if self._attempts_expired(record, now):
            record.failed_attempts = 0
            record.suspended_until = None
        record.failed_attempts += 1
        record.last_attempt_at = now

        if record.failed_attempts >= self.ban_attempt_limit:
            record.banned_at = now
            record.suspended_until = None
            logger.warning(
                "User banned after repeated failed logins",
                user_id=user_id,
                failed_attempts=record.failed_attempts,
            )
        elif record.failed_attempts >= self.attempt_limit and not record.is_suspended_at(now):
            record.suspended_until = now + self.suspension_time
            logger.warning(
                "User suspended after failed logins",
                user_id=user_id,
                failed_attempts=record.failed_attempts,
                suspended_until=record.suspended_until.isoformat(),
            )

        return await self.store.save(record)

    async def clear_login_attempts(self, user_id: str) -> ThrottleRecord:
        """Reset attempts and suspension after a successful login. Bans stay."""
        record = await self.store.get(user_id)
        if record is None:
            return ThrottleRecord(user_id=user_id)
        if not self.enabled or record.is_banned:
            return record
        record.failed_attempts = 0
        record.suspended_until = None
        return await self.store.save(record)

    async def suspend(self, user_id: str) -> ThrottleRecord:
        """Suspend a user for the configured suspension time."""
        record = await self.find_by_user_id(user_id)
        if not self.enabled or record.is_banned:
            return record
        record.suspended_until = self.clock() + self.suspension_time
        logger.info(
            "User suspended",
            user_id=user_id,
            suspended_until=record.suspended_until.isoformat(),
        )
        return await self.store.save(record)

    async def unsuspend(self, user_id: str) -> ThrottleRecord:
        """Lift a suspension early. Has no effect on bans."""
        record = await self.store.get(user_id)
        if record is None or record.suspended_until is None:
            return record or ThrottleRecord(user_id=user_id)
        if not self.enabled:
            return record
        record.suspended_until = None
        record.failed_attempts = 0
        logger.info("User unsuspended", user_id=user_id)
        return await self.store.save(record)

    async def ban(self, user_id: str) -> ThrottleRecord:
        """Ban a user. Banning twice keeps the original ban time."""
        record = await self.find_by_user_id(user_id)
        if not self.enabled or record.is_banned:
            return record
        record.banned_at = self.clock()
        record.suspended_until = None
        logger.info("User banned", user_id=user_id)
        return await self.store.save(record)
