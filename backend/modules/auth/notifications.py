"""
Notification delivery for the auth flows.

Email transport is outside this service; the bundled implementation
writes messages to the log so reset links are visible in development.
"""

import logging

from .interfaces import INotificationService

logger = logging.getLogger(__name__)


RESET_SUBJECT = "Password reset token"


def build_reset_message(reset_url: str) -> str:
    return (
        "You are receiving this email because you (or someone else) has "
        "requested the reset of a password. Please make a PUT request to: "
        f"\n\n {reset_url}"
    )


class LoggingNotificationService(INotificationService):
    """Writes each message to the log instead of sending it."""

    async def send(self, to: str, subject: str, message: str) -> None:
        logger.info("Notification to %s: %s\n%s", to, subject, message)
