"""Abstract credential store.

Defines the persistence contract the lifecycle service depends on.
"""

from abc import ABC, abstractmethod

from authority.domain.entities import Group, User


class CredentialStore(ABC):
    """Persists users, their credential hashes and group memberships.

    Implementations must enforce email uniqueness themselves so that
    concurrent registrations of the same address cannot both succeed.
    """

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User | None:
        """Get a user by ID.

        Returns:
            User if found, None otherwise.
        """

    @abstractmethod
    async def find_by_login(self, email: str) -> User | None:
        """Get a user by login identifier (normalized email).

        Returns:
            User if found, None otherwise.
        """

    @abstractmethod
    async def create(
        self,
        email: str,
        password_hash: str,
        activation_code_hash: str | None = None,
    ) -> User:
        """Create a new, not yet activated user.

        Args:
            email: Normalized email address.
            password_hash: Hashed password.
            activation_code_hash: Hash of the pending activation code.

        Returns:
            The created user with its assigned id.

        Raises:
            DuplicateUserError: If the email is already registered.
        """

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist the user's mutable fields and group memberships in one write.

        Raises:
            UserNotFoundError: If the user no longer exists.
            DuplicateUserError: If the write violates a uniqueness constraint.
            PersistenceError: If the store otherwise rejects the write.
        """

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete a user.

        Returns:
            True if a user was deleted, False if the id did not resolve.
        """

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List every registered user."""

    @abstractmethod
    async def list_all_groups(self) -> list[Group]:
        """List every known group."""
