"""Persistence layer: SQLAlchemy database manager, models, repositories and stores."""

from authority.infrastructure.persistence.credential_store import SQLCredentialStore
from authority.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    init_database,
)
from authority.infrastructure.persistence.throttle_store import SQLThrottleStore

__all__ = [
    "Base",
    "DatabaseManager",
    "SQLCredentialStore",
    "SQLThrottleStore",
    "init_database",
]
