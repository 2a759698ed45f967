"""Domain entities for Authority.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from authority.domain.entities.group import Group
from authority.domain.entities.throttle import ThrottleRecord
from authority.domain.entities.user import User, normalize_email

__all__ = [
    "Group",
    "ThrottleRecord",
    "User",
    "normalize_email",
]
