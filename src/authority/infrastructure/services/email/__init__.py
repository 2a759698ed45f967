"""Email delivery: providers, templates and the notification gateway."""

from authority.infrastructure.services.email.console_provider import ConsoleEmailProvider
from authority.infrastructure.services.email.email_provider import EmailProvider
from authority.infrastructure.services.email.notification_gateway import (
    EmailNotificationGateway,
    create_email_provider,
)
from authority.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from authority.infrastructure.services.email.template_renderer import (
    RenderedEmail,
    TemplateRenderer,
    UnknownTemplateError,
)

__all__ = [
    "ConsoleEmailProvider",
    "EmailNotificationGateway",
    "EmailProvider",
    "RenderedEmail",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
    "UnknownTemplateError",
    "create_email_provider",
]
