"""User entity for registration, activation and group membership.

Users are uniquely identified by their (normalized) email address, which is
also their login identifier.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def normalize_email(email: str | None) -> str:
    """Return the canonical form of a login identifier."""
    return (email or "").strip().lower()


@dataclass
class User:
    """User entity.

    Attributes:
        id: Unique identifier (UUID string).
        email: Login identifier, unique and lower-cased.
        password_hash: Hashed password (never store plaintext).
        first_name: Optional display name.
        last_name: Optional display name.
        activated: Whether the user proved control of the email address.
        activation_code_hash: SHA-256 of the pending activation code.
            Present only while the user is not activated.
        activated_at: Timestamp of the successful activation.
        group_ids: Ids of the groups the user belongs to.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    id: str
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    activated: bool = False
    activation_code_hash: str | None = None
    activated_at: datetime | None = None
    group_ids: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User ID is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        self.email = normalize_email(self.email)
        self.group_ids = set(self.group_ids)

    @property
    def full_name(self) -> str:
        """Display name built from the optional name parts."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def mark_activated(self, when: datetime | None = None) -> None:
        """Flag the user as activated and consume the activation code."""
        self.activated = True
        self.activated_at = when or datetime.now(timezone.utc)
        self.activation_code_hash = None
