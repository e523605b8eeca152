"""Outbound mail interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MailMessage:
    to: str
    subject: str
    text: str


class Mailer(ABC):
    """Delivers transactional email; failures must not undo the caller's write."""

    @abstractmethod
    def send(self, message: MailMessage) -> None:
        """Deliver ``message``."""


__all__ = ["MailMessage", "Mailer"]
