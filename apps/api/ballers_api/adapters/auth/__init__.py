"""Token and credential adapters."""

from .base import InvalidTokenError, TokenService
from .passwords import PasswordHasher
from .signed_tokens import SignedTokenService

__all__ = [
    "InvalidTokenError",
    "PasswordHasher",
    "SignedTokenService",
    "TokenService",
]
