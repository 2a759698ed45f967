"""Email notification gateway.

Each notification is rendered and delivered in a detached asyncio task so
the caller never waits for, or fails because of, the mail transport.
Delivery failures are logged and counted.
"""

import asyncio
from typing import Any, Mapping

from authority.core.config import Settings, get_settings
from authority.core.logging import get_logger
from authority.domain.interfaces import NotificationGateway
from authority.infrastructure.services.email.console_provider import ConsoleEmailProvider
from authority.infrastructure.services.email.email_provider import EmailProvider
from authority.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from authority.infrastructure.services.email.template_renderer import TemplateRenderer

logger = get_logger(__name__)


class EmailNotificationGateway(NotificationGateway):
    """Renders templates and hands them to an email provider."""

    def __init__(
        self,
        provider: EmailProvider,
        renderer: TemplateRenderer | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            provider: Transport used for delivery.
            renderer: Template renderer; built-in templates if omitted.
            settings: Sender configuration; loaded from the environment if omitted.
        """
        settings = settings or get_settings()
        self.provider = provider
        self.renderer = renderer or TemplateRenderer()
        self.from_email = settings.email_from_address
        self.from_name = settings.email_from_name
        self.sent_count = 0
        self.failed_count = 0
        self._pending: set[asyncio.Task[bool]] = set()

    def send(
        self,
        template_name: str,
        data: Mapping[str, Any],
        recipient: str,
        subject: str,
    ) -> None:
        task = asyncio.get_running_loop().create_task(
            self._deliver(template_name, dict(data), recipient, subject)
        )
        # Hold a reference until the task is done so it is not garbage collected
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every queued notification to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _deliver(
        self,
        template_name: str,
        data: dict[str, Any],
        recipient: str,
        subject: str,
    ) -> bool:
        try:
            rendered = self.renderer.render(template_name, data)
            sent = await self.provider.send_email(
                to=recipient,
                subject=subject,
                html_body=rendered.html_body,
                text_body=rendered.text_body,
                from_email=self.from_email,
                from_name=self.from_name,
            )
        except Exception as e:
            self.failed_count += 1
            logger.error(
                "Notification delivery failed",
                template=template_name,
                recipient=recipient,
                error=str(e),
            )
            return False

        if sent:
            self.sent_count += 1
            logger.info("Notification sent", template=template_name, recipient=recipient)
        else:
            self.failed_count += 1
            logger.warning("Notification not accepted by provider", template=template_name, recipient=recipient)
        return sent


def create_email_provider(settings: Settings) -> EmailProvider:
    """Create the email provider selected in settings."""
    if settings.email_provider == "smtp":
        return SMTPProvider(SMTPSettings.from_settings(settings))
    return ConsoleEmailProvider()
