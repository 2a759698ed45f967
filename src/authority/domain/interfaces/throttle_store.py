"""Abstract storage for throttle records."""

from abc import ABC, abstractmethod

from authority.domain.entities import ThrottleRecord


class ThrottleStore(ABC):
    """Persists one throttle record per user."""

    @abstractmethod
    async def get(self, user_id: str) -> ThrottleRecord | None:
        """Get the throttle record of a user, None if none was written yet."""

    @abstractmethod
    async def save(self, record: ThrottleRecord) -> ThrottleRecord:
        """Insert or update a throttle record."""
