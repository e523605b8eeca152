"""HMAC-signed bearer tokens."""

from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta
import hashlib
import hmac
import json

from ballers_api.adapters.auth.base import InvalidTokenError, TokenService


class SignedTokenService(TokenService):
    """Tokens of the form ``base64(json payload).hex signature``.

    The payload holds ``sub`` and ``exp`` (unix seconds). Verification needs
    only the secret, never a storage round trip.
    """

    def __init__(self, secret: str, default_ttl: timedelta) -> None:
        self._secret = secret.encode("utf-8")
        self._default_ttl = default_ttl

    def issue(self, subject_id: str, ttl: timedelta | None = None) -> str:
        expires_at = datetime.now(UTC) + (ttl if ttl is not None else self._default_ttl)
        payload = json.dumps({"sub": subject_id, "exp": int(expires_at.timestamp())}, separators=(",", ":"))
        payload_b64 = base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")
        return f"{payload_b64}.{self._sign(payload_b64)}"

    def verify(self, token: str) -> str:
        if not token.isascii():
            raise InvalidTokenError("Invalid token")
        try:
            payload_b64, signature = token.rsplit(".", 1)
        except ValueError as exc:
            raise InvalidTokenError("Invalid token") from exc

        if not hmac.compare_digest(signature, self._sign(payload_b64)):
            raise InvalidTokenError("Invalid token")

        try:
            data = json.loads(base64.urlsafe_b64decode(payload_b64.encode("ascii")))
            subject_id = str(data["sub"])
            expires_at = int(data["exp"])
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidTokenError("Invalid token") from exc

        if not subject_id or expires_at <= int(datetime.now(UTC).timestamp()):
            raise InvalidTokenError("Invalid token")
        return subject_id

    def _sign(self, payload_b64: str) -> str:
        return hmac.new(self._secret, payload_b64.encode("ascii"), hashlib.sha256).hexdigest()


__all__ = ["SignedTokenService"]
