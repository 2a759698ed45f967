"""Abstract notification gateway."""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class NotificationGateway(ABC):
    """Sends templated notifications to users.

    Sending is fire-and-forget: implementations must return promptly and must
    not raise for delivery problems, which are theirs to log.
    """

    @abstractmethod
    def send(
        self,
        template_name: str,
        data: Mapping[str, Any],
        recipient: str,
        subject: str,
    ) -> None:
        """Queue a notification for delivery.

        Args:
            template_name: Name of the template to render (e.g. "auth/welcome").
            data: Variables available to the template.
            recipient: Recipient email address.
            subject: Subject line.
        """
