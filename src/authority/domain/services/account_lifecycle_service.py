"""Account lifecycle service.

Orchestrates registration, activation, activation resend, profile and group
updates, removal and listing of users. Collaborators are injected so that
the service runs the same against SQLAlchemy or in-memory stores.

Domain failures raised by the collaborators are caught here and returned as
outcomes. Infrastructure failures (database or mail server unreachable)
propagate unchanged.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable

from authority.core.config import Settings, get_settings
from authority.core.logging import get_logger
from authority.domain.entities import User, normalize_email
from authority.domain.exceptions import (
    AccountError,
    ActivationFailedError,
    AlreadyActivatedError,
    DuplicateUserError,
    InvalidCredentialsError,
    PersistenceError,
    UserNotFoundError,
)
from authority.domain.interfaces import CredentialStore, NotificationGateway
from authority.domain.services.activation_code import (
    activation_code_matches,
    generate_activation_code,
)
from authority.domain.services.group_membership import diff_group_membership
from authority.domain.services.outcomes import (
    ActivationOutcome,
    RegistrationOutcome,
    ResendOutcome,
    UpdateOutcome,
    UserView,
    derive_status,
)
from authority.domain.services.throttle_tracker import ThrottleTracker
from authority.infrastructure.auth import hash_password

logger = get_logger(__name__)

ACTIVATION_TEMPLATE = "auth/welcome"


class AccountLifecycleService:
    """Service for the user account lifecycle."""

    def __init__(
        self,
        store: CredentialStore,
        throttle: ThrottleTracker,
        notifications: NotificationGateway,
        settings: Settings | None = None,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        """Initialize the lifecycle service.

        Args:
            store: Credential store holding users and groups.
            throttle: Tracker answering suspension and ban questions.
            notifications: Gateway used for activation emails.
            settings: Application settings; loaded from the environment if omitted.
            password_hasher: Function turning a plaintext password into a hash.
        """
        self.store = store
        self.throttle = throttle
        self.notifications = notifications
        self.settings = settings or get_settings()
        self.password_hasher = password_hasher

    async def register(self, email: str, password: str) -> RegistrationOutcome:
        """Register a new, not yet activated user and email the activation link.

        Args:
            email: Login identifier; normalized before use.
            password: Plaintext password; only its hash is stored.

        Returns:
            RegistrationOutcome carrying the new user's id on success.
        """
        login = normalize_email(email)
        try:
            if not login:
                raise InvalidCredentialsError("Login field required.")
            if not password:
                raise InvalidCredentialsError("Password field required.")
            if await self.store.find_by_login(login) is not None:
                raise DuplicateUserError("User already exists.")

            raw_code, code_hash = generate_activation_code(
                self.settings.activation_code_bytes
            )
            # The store's unique constraint settles concurrent registrations
            user = await self.store.create(login, self.password_hasher(password), code_hash)
        except AccountError as e:
            logger.warning("Registration failed", email=login, reason=e.kind.value)
            return RegistrationOutcome.failed(e)

        logger.info("User registered", user_id=user.id, email=user.email)
        self._send_activation_email(user, raw_code, self.settings.welcome_subject)

        return RegistrationOutcome.ok(
            "Your account has been created. Check your email for the confirmation link.",
            user_id=user.id,
        )

    async def update(
        self,
        user_id: str,
        first_name: str | None,
        last_name: str | None,
        desired_group_ids: Iterable[str] = (),
    ) -> UpdateOutcome:
        """Update a user's names and synchronize group memberships.

        Every known group is evaluated: the user ends up in exactly the known
        groups listed in ``desired_group_ids``.
        """
        try:
            user = await self.store.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError("User not found")

            groups = await self.store.list_all_groups()
            change = diff_group_membership(
                user.group_ids, desired_group_ids, (group.id for group in groups)
            )

            updated = replace(
                user,
                first_name=first_name,
                last_name=last_name,
                group_ids=set(change.resulting),
                updated_at=datetime.now(timezone.utc),
            )
            try:
                await self.store.save(updated)
            except (DuplicateUserError, PersistenceError) as e:
                raise PersistenceError("Unable to update profile") from e
        except AccountError as e:
            logger.warning("Profile update failed", user_id=user_id, reason=e.kind.value)
            return UpdateOutcome.failed(e)

        logger.info(
            "Profile updated",
            user_id=user_id,
            added_groups=sorted(change.added),
            removed_groups=sorted(change.removed),
        )
        return UpdateOutcome.ok(
            "Profile updated",
            added_group_ids=change.added,
            removed_group_ids=change.removed,
        )

    async def activate(self, user_id: str, code: str) -> ActivationOutcome:
        """Activate a user with the code from their activation email.

        The code is consumed on success and cannot be used again.
        """
        try:
            user = await self.store.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError("User was not found.")
            if user.activated:
                raise AlreadyActivatedError("User is already activated.")
            if not activation_code_matches(code, user.activation_code_hash):
                raise ActivationFailedError("Activation could not be completed.")

            activated = replace(user, group_ids=set(user.group_ids))
            activated.mark_activated()
            await self.store.save(activated)
        except AccountError as e:
            logger.warning("Activation failed", user_id=user_id, reason=e.kind.value)
            return ActivationOutcome.failed(e)

        logger.info("User activated", user_id=user_id)
        return ActivationOutcome.ok("Activation complete.")

    async def resend_activation(self, email: str) -> ResendOutcome:
        """Issue a new activation code and email it again.

        The previously issued code stops working.
        """
        login = normalize_email(email)
        try:
            if not login:
                raise InvalidCredentialsError("Login field required.")
            user = await self.store.find_by_login(login)
            if user is None:
                raise UserNotFoundError("User was not found.")
            if user.activated:
                raise AlreadyActivatedError("That account has already been activated.")

            raw_code, code_hash = generate_activation_code(
                self.settings.activation_code_bytes
            )
            user = await self.store.save(replace(user, activation_code_hash=code_hash))
        except AccountError as e:
            logger.warning("Activation resend failed", email=login, reason=e.kind.value)
            return ResendOutcome.failed(e)

        self._send_activation_email(user, raw_code, self.settings.resend_subject)
        logger.info("Activation email resent", user_id=user.id)
        return ResendOutcome.ok("Check your email for the confirmation link.")

    async def remove(self, user_id: str) -> bool:
        """Delete a user. Unknown ids answer False instead of failing."""
        deleted = await self.store.delete(user_id)
        if deleted:
            logger.info("User removed", user_id=user_id)
        return deleted

    async def get_by_id(self, user_id: str) -> User | None:
        return await self.store.find_by_id(user_id)

    async def list_all(self) -> list[UserView]:
        """List every user with a display status.

        Ban outranks suspension, and both outrank the activation status.
        """
        views: list[UserView] = []
        for user in await self.store.list_users():
            banned = await self.throttle.is_banned(user.id)
            suspended = await self.throttle.is_suspended(user.id)
            views.append(
                UserView(
                    id=user.id,
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    activated=user.activated,
                    status=derive_status(user.activated, suspended, banned),
                    group_ids=frozenset(user.group_ids),
                )
            )
        return views

    def _send_activation_email(self, user: User, raw_code: str, subject: str) -> None:
        # Activation code and user id travel together in the email payload
        self.notifications.send(
            ACTIVATION_TEMPLATE,
            {
                "app_name": self.settings.app_name,
                "email": user.email,
                "user_id": user.id,
                "activation_code": raw_code,
                "activation_url": self.settings.activation_url(user.id, raw_code),
            },
            user.email,
            subject,
        )
