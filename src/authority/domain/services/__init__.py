"""Domain services for Authority.

Services contain the business logic of the account lifecycle that doesn't
naturally fit within a single entity.
"""

from authority.domain.services.account_lifecycle_service import (
    ACTIVATION_TEMPLATE,
    AccountLifecycleService,
)
from authority.domain.services.activation_code import (
    activation_code_matches,
    generate_activation_code,
    hash_activation_code,
)
from authority.domain.services.group_membership import (
    MembershipChange,
    diff_group_membership,
)
from authority.domain.services.outcomes import (
    ActivationOutcome,
    Outcome,
    RegistrationOutcome,
    ResendOutcome,
    UpdateOutcome,
    UserStatus,
    UserView,
    derive_status,
)
from authority.domain.services.throttle_tracker import ThrottleTracker

__all__ = [
    "ACTIVATION_TEMPLATE",
    "AccountLifecycleService",
    "ActivationOutcome",
    "MembershipChange",
    "Outcome",
    "RegistrationOutcome",
    "ResendOutcome",
    "ThrottleTracker",
    "UpdateOutcome",
    "UserStatus",
    "UserView",
    "activation_code_matches",
    "derive_status",
    "diff_group_membership",
    "generate_activation_code",
    "hash_activation_code",
]
