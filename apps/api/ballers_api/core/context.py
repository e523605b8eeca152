"""Process-wide collaborators, built once per application instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from ballers_api.adapters.auth import PasswordHasher, SignedTokenService, TokenService
from ballers_api.adapters.mail import LoggingMailer, Mailer
from ballers_api.core.config import Settings
from ballers_api.repositories.memory import InMemoryStore


@dataclass(slots=True)
class AppContext:
    settings: Settings
    store: InMemoryStore
    tokens: TokenService
    passwords: PasswordHasher = field(default_factory=PasswordHasher)
    mailer: Mailer = field(default_factory=LoggingMailer)

    @classmethod
    def build(cls, settings: Settings, store: InMemoryStore | None = None) -> AppContext:
        return cls(
            settings=settings,
            store=store if store is not None else InMemoryStore(),
            tokens=SignedTokenService(settings.token_secret, timedelta(days=settings.token_ttl_days)),
        )

    @property
    def activation_ttl(self) -> timedelta:
        return timedelta(hours=self.settings.activation_token_ttl_hours)

    @property
    def reset_password_ttl(self) -> timedelta:
        return timedelta(hours=self.settings.reset_password_token_ttl_hours)

    def close(self) -> None:
        self.store.close()


__all__ = ["AppContext"]
