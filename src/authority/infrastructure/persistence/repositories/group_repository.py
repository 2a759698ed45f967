"""Repository for group database operations."""

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authority.infrastructure.persistence.models import GroupModel


class GroupRepository:
    """Repository for group database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, group: GroupModel) -> GroupModel:
        """Create a new group.

        Args:
            group: Group model to create.

        Returns:
            Created group model.
        """
        self.session.add(group)
        await self.session.flush()
        return group

    async def get_many(self, group_ids: Iterable[str]) -> list[GroupModel]:
        """Get the groups with the given IDs. Unknown IDs are skipped."""
        ids = list(group_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(GroupModel).where(GroupModel.id.in_(ids))
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[GroupModel]:
        """List all groups ordered by name."""
        result = await self.session.execute(select(GroupModel).order_by(GroupModel.name))
        return list(result.scalars().all())
