"""SQLAlchemy implementation of the credential store.

Each write commits its own transaction, so a failed write leaves the stored
state exactly as it was. Uniqueness conflicts detected by the database are
reported as ``DuplicateUserError``; every other database error propagates.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authority.core.logging import get_logger
from authority.domain.entities import Group, User, normalize_email
from authority.domain.exceptions import DuplicateUserError, PersistenceError, UserNotFoundError
from authority.domain.interfaces import CredentialStore
from authority.infrastructure.persistence.models import GroupModel, UserModel
from authority.infrastructure.persistence.repositories import (
    GroupRepository,
    ThrottleRepository,
    UserRepository,
)

logger = get_logger(__name__)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_user(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        password_hash=model.password_hash,
        first_name=model.first_name,
        last_name=model.last_name,
        activated=model.activated,
        activation_code_hash=model.activation_code_hash,
        activated_at=ensure_utc(model.activated_at),
        group_ids={group.id for group in model.groups},
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
    )


def to_group(model: GroupModel) -> Group:
    return Group(id=model.id, name=model.name, description=model.description)


class SQLCredentialStore(CredentialStore):
    """Credential store backed by the users, groups and users_groups tables."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the store.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.users = UserRepository(session)
        self.groups = GroupRepository(session)
        self.throttles = ThrottleRepository(session)

    async def find_by_id(self, user_id: str) -> User | None:
        model = await self.users.get_by_id(user_id)
        return to_user(model) if model else None

    async def find_by_login(self, email: str) -> User | None:
        model = await self.users.get_by_email(normalize_email(email))
        return to_user(model) if model else None

    async def create(
        self,
        email: str,
        password_hash: str,
        activation_code_hash: str | None = None,
    ) -> User:
        model = UserModel(
            id=str(uuid.uuid4()),
            email=normalize_email(email),
            password_hash=password_hash,
            activated=False,
            activation_code_hash=activation_code_hash,
            groups=[],
        )
        try:
            await self.users.create(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("User creation rejected by unique constraint", email=model.email)
            raise DuplicateUserError("User already exists.") from e
        return to_user(model)

    async def save(self, user: User) -> User:
        model = await self.users.get_by_id(user.id)
        if model is None:
            raise UserNotFoundError("User not found")
        groups = await self.groups.get_many(user.group_ids)

        model.email = normalize_email(user.email)
        model.password_hash = user.password_hash
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.activated = user.activated
        model.activation_code_hash = user.activation_code_hash
        model.activated_at = user.activated_at
        model.groups = groups

        try:
            await self.session.flush()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if "unique" in str(e.orig).lower():
                raise DuplicateUserError("User already exists.") from e
            raise PersistenceError("Unable to save user") from e
        return to_user(model)

    async def delete(self, user_id: str) -> bool:
        model = await self.users.get_by_id(user_id)
        if model is None:
            return False
        await self.throttles.delete_for_user(user_id)
        await self.users.delete(model)
        await self.session.commit()
        return True

    async def list_users(self) -> list[User]:
        return [to_user(model) for model in await self.users.list_all()]

    async def list_all_groups(self) -> list[Group]:
        return [to_group(model) for model in await self.groups.list_all()]

    async def create_group(self, name: str, description: str | None = None) -> Group:
        """Create a group.

        Raises:
            PersistenceError: If a group with this name exists.
        """
        model = GroupModel(id=str(uuid.uuid4()), name=name, description=description)
        try:
            await self.groups.create(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise PersistenceError(f"Group '{name}' already exists") from e
        return to_group(model)
