"""Mail adapters."""

from .base import MailMessage, Mailer
from .logging_mailer import LoggingMailer

__all__ = ["LoggingMailer", "MailMessage", "Mailer"]
