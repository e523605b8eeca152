"""Token service interfaces."""

from abc import ABC, abstractmethod
from datetime import timedelta


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, or expired."""


class TokenService(ABC):
    """Issues and verifies bearer tokens carrying a subject id and an expiry."""

    @abstractmethod
    def issue(self, subject_id: str, ttl: timedelta | None = None) -> str:
        """Return a token for ``subject_id`` valid for ``ttl``."""

    @abstractmethod
    def verify(self, token: str) -> str:
        """Return the token's subject id or raise :class:`InvalidTokenError`."""


__all__ = ["InvalidTokenError", "TokenService"]
