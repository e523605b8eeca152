"""Password hashing."""

import hashlib
import hmac
import secrets

_ITERATIONS = 100_000


class PasswordHasher:
    """PBKDF2-HMAC-SHA256 hashes stored as ``salt$hexdigest``."""

    def __init__(self, iterations: int = _ITERATIONS) -> None:
        self._iterations = iterations

    def hash(self, password: str, salt: str | None = None) -> str:
        salt = salt or secrets.token_hex(16)
        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), self._iterations)
        return f"{salt}${digest.hex()}"

    def verify(self, password: str, stored_hash: str) -> bool:
        try:
            salt, _ = stored_hash.split("$", 1)
        except (ValueError, AttributeError):
            return False
        return hmac.compare_digest(self.hash(password, salt), stored_hash)


__all__ = ["PasswordHasher"]
