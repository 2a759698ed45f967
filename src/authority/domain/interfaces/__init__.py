"""Interfaces to the collaborators of the account lifecycle.

The domain depends on these abstractions; the infrastructure package
provides the SQLAlchemy and email implementations.
"""

from authority.domain.interfaces.credential_store import CredentialStore
from authority.domain.interfaces.notification_gateway import NotificationGateway
from authority.domain.interfaces.throttle_store import ThrottleStore

__all__ = [
    "CredentialStore",
    "NotificationGateway",
    "ThrottleStore",
]
