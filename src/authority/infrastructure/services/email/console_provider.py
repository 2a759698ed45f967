"""Console email provider for development.

Emails are written to the log instead of being delivered.
"""

from authority.core.logging import get_logger
from authority.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ConsoleEmailProvider(EmailProvider):
    """Logs outgoing emails. Keeps the last messages for inspection."""

    def __init__(self, keep_last: int = 50) -> None:
        self.keep_last = keep_last
        self.outbox: list[dict[str, str]] = []

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
    ) -> bool:
        message = {
            "to": to,
            "subject": subject,
            "from": f"{from_name} <{from_email}>",
            "text_body": text_body,
        }
        self.outbox.append(message)
        del self.outbox[: -self.keep_last]

        logger.info(
            f"[EMAIL] To: {to}\nSubject: {subject}\nBody:\n{text_body}\n{'=' * 80}"
        )
        return True
