"""Error kind mapping and response envelope tests."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from ballers_api.errors import GENERIC_ERROR_MESSAGE, ApiError, ErrorKind, normalize
from ballers_api.repositories.memory import InMemoryCollection
from ballers_api.schemas.auth import Role
from support import ApiTestCase


class NormalizeTests(unittest.TestCase):
    def test_every_kind_maps_to_its_documented_status(self) -> None:
        expected = {
            ErrorKind.MISSING_TOKEN: 403,
            ErrorKind.INVALID_TOKEN: 404,
            ErrorKind.UNAUTHORIZED: 401,
            ErrorKind.FORBIDDEN: 403,
            ErrorKind.MALFORMED_IDENTIFIER: 412,
            ErrorKind.VALIDATION_ERROR: 412,
            ErrorKind.NOT_FOUND: 404,
            ErrorKind.CONFLICT: 412,
            ErrorKind.WRITE_FAILURE: 400,
            ErrorKind.UNEXPECTED: 500,
        }
        self.assertEqual(set(expected), set(ErrorKind))
        for kind, status_code in expected.items():
            with self.subTest(kind=kind):
                code, payload = normalize(ApiError(kind, "boom"))
                self.assertEqual(code, status_code)
                self.assertFalse(payload.success)
                self.assertEqual(payload.message, "boom")

    def test_default_messages(self) -> None:
        self.assertEqual(ApiError(ErrorKind.MISSING_TOKEN).message, "Token needed to access resources")
        self.assertEqual(ApiError(ErrorKind.INVALID_TOKEN).message, "Invalid token")
        self.assertEqual(ApiError(ErrorKind.FORBIDDEN).message, "You are not permitted to perform this action")
        self.assertEqual(ApiError(ErrorKind.MALFORMED_IDENTIFIER).message, "Invalid Id supplied")

    def test_error_detail_defaults_to_message(self) -> None:
        _, payload = normalize(ApiError(ErrorKind.CONFLICT, "Email is linked to another account"))
        self.assertEqual(payload.error, "Email is linked to another account")

        _, detailed = normalize(ApiError(ErrorKind.WRITE_FAILURE, "Error saving", error="disk full"))
        self.assertEqual(detailed.error, "disk full")

    def test_unknown_exceptions_become_generic_500(self) -> None:
        code, payload = normalize(RuntimeError("connection string leaked"))
        self.assertEqual(code, 500)
        self.assertEqual(payload.message, GENERIC_ERROR_MESSAGE)
        self.assertNotIn("leaked", payload.model_dump_json())


class ErrorEnvelopeApiTests(ApiTestCase):
    def test_collaborator_failure_returns_500_envelope(self) -> None:
        _, headers = self.login_as(Role.ADMIN)

        with patch.object(InMemoryCollection, "count", side_effect=RuntimeError("database offline")):
            response = self.client.get("/api/v1/badge/all", headers=headers)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {"success": False, "message": GENERIC_ERROR_MESSAGE, "error": GENERIC_ERROR_MESSAGE},
        )

    def test_correlation_id_is_echoed(self) -> None:
        response = self.client.get("/api/v1/", headers={"X-Correlation-Id": "req-fixed"})
        self.assertEqual(response.headers["X-Correlation-Id"], "req-fixed")

        generated = self.client.get("/api/v1/")
        self.assertTrue(generated.headers["X-Correlation-Id"].startswith("req-"))

    def test_invalid_path_parameter_is_a_validation_error(self) -> None:
        _, headers = self.login_as(Role.ADMIN)

        response = self.client.get("/api/v1/badge/role/superuser", headers=headers)

        self.assertEqual(response.status_code, 412)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertTrue(body["message"].startswith('"role" must be one of'))

    def test_welcome(self) -> None:
        response = self.client.get("/api/v1/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "message": "Welcome to Ballers API endpoint"})


if __name__ == "__main__":
    unittest.main()
