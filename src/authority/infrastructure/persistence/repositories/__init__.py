"""Repositories for Authority database operations."""

from authority.infrastructure.persistence.repositories.group_repository import GroupRepository
from authority.infrastructure.persistence.repositories.throttle_repository import (
    ThrottleRepository,
)
from authority.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "GroupRepository",
    "ThrottleRepository",
    "UserRepository",
]
