"""Mailer that records messages instead of delivering them."""

import logging

from ballers_api.adapters.mail.base import MailMessage, Mailer
from ballers_api.core.logging_safety import safe_log_identifier

logger = logging.getLogger(__name__)


class LoggingMailer(Mailer):
    def __init__(self) -> None:
        self.outbox: list[MailMessage] = []

    def send(self, message: MailMessage) -> None:
        self.outbox.append(message)
        logger.info(
            "mail.queued to=%s subject=%s",
            safe_log_identifier(message.to, prefix="rcpt"),
            message.subject,
        )


__all__ = ["LoggingMailer"]
