"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from authority.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations.

    Users are always loaded with their groups so that the membership
    collection can be read and replaced without lazy loading.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID with groups eagerly loaded.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .options(selectinload(UserModel.groups))
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by (normalized) email.

        Args:
            email: User's email address.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.email == email)
            .options(selectinload(UserModel.groups))
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[UserModel]:
        """List all users, oldest first."""
        result = await self.session.execute(
            select(UserModel)
            .options(selectinload(UserModel.groups))
            .order_by(UserModel.created_at, UserModel.email)
        )
        return list(result.scalars().all())

    async def delete(self, user: UserModel) -> None:
        """Delete a user and its group memberships."""
        await self.session.delete(user)
        await self.session.flush()
