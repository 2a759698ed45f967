"""Wiring of the account lifecycle service to its SQLAlchemy and email adapters."""

from sqlalchemy.ext.asyncio import AsyncSession

from authority.core.config import Settings, get_settings
from authority.domain.interfaces import NotificationGateway
from authority.domain.services import AccountLifecycleService, ThrottleTracker
from authority.infrastructure.persistence import SQLCredentialStore, SQLThrottleStore
from authority.infrastructure.services.email import (
    EmailNotificationGateway,
    create_email_provider,
)


def create_notification_gateway(settings: Settings | None = None) -> EmailNotificationGateway:
    """Create the email gateway for the configured provider."""
    settings = settings or get_settings()
    return EmailNotificationGateway(create_email_provider(settings), settings=settings)


def create_throttle_tracker(
    session: AsyncSession, settings: Settings | None = None
) -> ThrottleTracker:
    return ThrottleTracker(SQLThrottleStore(session), settings=settings or get_settings())


def create_account_service(
    session: AsyncSession,
    notifications: NotificationGateway,
    settings: Settings | None = None,
) -> AccountLifecycleService:
    """Create a lifecycle service bound to one database session.

    Args:
        session: Session shared by the credential and throttle stores.
        notifications: Gateway for activation emails.
        settings: Application settings; loaded from the environment if omitted.
    """
    settings = settings or get_settings()
    return AccountLifecycleService(
        store=SQLCredentialStore(session),
        throttle=create_throttle_tracker(session, settings),
        notifications=notifications,
        settings=settings,
    )
