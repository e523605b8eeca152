"""Shared fixtures for API tests."""

from __future__ import annotations

from datetime import UTC, datetime
import os
import unittest

from fastapi.testclient import TestClient

from ballers_api.core.config import get_settings
from ballers_api.main import create_app
from ballers_api.repositories.memory import USERS, InMemoryStore
from ballers_api.schemas.auth import Role

TEST_PASSWORD = "123456"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "BALLERS_ENVIRONMENT",
        "BALLERS_TOKEN_SECRET",
        "BALLERS_LOG_LEVEL",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["BALLERS_ENVIRONMENT"] = "test"
        os.environ["BALLERS_TOKEN_SECRET"] = "test-token-secret"
        os.environ["BALLERS_LOG_LEVEL"] = "WARNING"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class ApiTestCase(_SettingsEnvCase):
    """Fresh application and store per test, with helpers that seed users directly."""

    def setUp(self) -> None:
        super().setUp()
        self.store = InMemoryStore()
        self.app = create_app(store=self.store)
        self.context = self.app.state.context
        self.client = TestClient(self.app)

    def add_user(
        self,
        *,
        role: Role = Role.USER,
        email: str | None = None,
        first_name: str = "Ada",
        activated: bool = True,
        verified_vendor: bool = False,
    ) -> dict:
        users = self.store.collection(USERS)
        vendor = {"company_name": "Highrise Homes", "verified": verified_vendor} if role is Role.VENDOR else None
        return users.insert(
            {
                "first_name": first_name,
                "last_name": "Lovelace",
                "email": email or f"{role.value}-{users.count()}@ballers.com",
                "phone": "08012345678",
                "password": self.context.passwords.hash(TEST_PASSWORD),
                "role": role.value,
                "referral_code": f"{first_name[:2].lower()}{users.count():04d}",
                "activated": activated,
                "activation_date": datetime.now(UTC) if activated else None,
                "vendor": vendor,
            }
        )

    def headers_for(self, user: dict) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.context.tokens.issue(user['id'])}"}

    def login_as(self, role: Role = Role.USER, **kwargs) -> tuple[dict, dict[str, str]]:
        user = self.add_user(role=role, **kwargs)
        return user, self.headers_for(user)


def property_payload(**overrides) -> dict:
    payload = {
        "name": "Lekki Gardens",
        "address": {"street1": "12 Admiralty Way", "city": "Lekki", "state": "Lagos"},
        "price": 40_000_000,
        "units": 4,
        "houseType": "Maisonette",
        "bedrooms": 4,
        "toilets": 5,
        "description": "Four bedroom maisonette close to the beach",
    }
    payload.update(overrides)
    return payload
