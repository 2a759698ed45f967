"""SQLAlchemy models for Authority.

All models inherit from the Base class defined in database.py.
"""

from authority.infrastructure.persistence.models.group import GroupModel
from authority.infrastructure.persistence.models.throttle import ThrottleModel
from authority.infrastructure.persistence.models.user import UserModel
from authority.infrastructure.persistence.models.users_groups import UsersGroupsModel

__all__ = [
    "GroupModel",
    "ThrottleModel",
    "UserModel",
    "UsersGroupsModel",
]
