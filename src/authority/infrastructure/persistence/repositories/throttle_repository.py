"""Throttle repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from authority.infrastructure.persistence.models import ThrottleModel


class ThrottleRepository:
    """Repository for throttle database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_user_id(self, user_id: str) -> ThrottleModel | None:
        result = await self.session.execute(
            select(ThrottleModel).where(ThrottleModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, throttle: ThrottleModel) -> ThrottleModel:
        """Insert or update a throttle row.

        Args:
            throttle: Throttle model, attached or detached.

        Returns:
            The model attached to the session.
        """
        merged = await self.session.merge(throttle)
        await self.session.flush()
        return merged

    async def delete_for_user(self, user_id: str) -> None:
        await self.session.execute(
            delete(ThrottleModel).where(ThrottleModel.user_id == user_id)
        )
        await self.session.flush()
