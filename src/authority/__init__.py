"""Authority - user account lifecycle service.

Registration, activation, profile and group management, and
throttle-aware listing of users.
"""

__version__ = "0.1.0"

from authority.domain.services import AccountLifecycleService, ThrottleTracker

__all__ = ["AccountLifecycleService", "ThrottleTracker", "__version__"]
