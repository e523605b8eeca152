"""Request pipeline ordering, token and guard tests."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from ballers_api.domain.guards import Allow, Deny, has_any_role, is_unverified_vendor_allowed, is_verified_vendor
from ballers_api.errors import ErrorKind
from ballers_api.routes.pipeline import Pipeline, PipelineOrderError
from ballers_api.schemas.auth import Principal, Role, VendorInfo
from ballers_api.schemas.badge import AddBadgeRequest
from ballers_api.services.badges import BadgeService
from support import ApiTestCase

MISSING_TOKEN = {
    "success": False,
    "message": "Token needed to access resources",
    "error": "Token needed to access resources",
}
FORBIDDEN = "You are not permitted to perform this action"


def _principal(role: Role, vendor: VendorInfo | None = None) -> Principal:
    return Principal(id="a" * 24, role=role, email="p@ballers.com", first_name="P", last_name="Q", vendor=vendor)


class GuardTests(unittest.TestCase):
    def test_missing_principal_is_missing_token(self) -> None:
        for guard in (has_any_role(Role.ADMIN), is_verified_vendor, is_unverified_vendor_allowed):
            with self.subTest(guard=guard):
                result = guard(None)
                self.assertIsInstance(result, Deny)
                self.assertIs(result.kind, ErrorKind.MISSING_TOKEN)

    def test_role_membership(self) -> None:
        guard = has_any_role(Role.ADMIN, Role.EDITOR)
        self.assertIsInstance(guard(_principal(Role.EDITOR)), Allow)
        denied = guard(_principal(Role.USER))
        self.assertIs(denied.kind, ErrorKind.FORBIDDEN)
        self.assertEqual(denied.reason, FORBIDDEN)

    def test_vendor_verification(self) -> None:
        unverified = _principal(Role.VENDOR, VendorInfo(company_name="Co", verified=False))
        verified = _principal(Role.VENDOR, VendorInfo(company_name="Co", verified=True))

        self.assertIsInstance(is_verified_vendor(unverified), Deny)
        self.assertIsInstance(is_verified_vendor(verified), Allow)
        self.assertIsInstance(is_unverified_vendor_allowed(unverified), Allow)
        self.assertIsInstance(is_unverified_vendor_allowed(_principal(Role.USER)), Deny)


class PipelineBuilderTests(unittest.TestCase):
    def test_canonical_order_builds(self) -> None:
        pipeline = Pipeline().require_token().require_role(Role.ADMIN).check_identifier().validate_body(AddBadgeRequest)
        self.assertEqual(len(pipeline.dependencies), 4)

    def test_builder_is_immutable(self) -> None:
        base = Pipeline().require_token()
        base.require_role(Role.ADMIN)
        self.assertEqual(len(base.dependencies), 1)

    def test_role_guard_requires_token(self) -> None:
        with self.assertRaises(PipelineOrderError):
            Pipeline().require_role(Role.ADMIN)

    def test_out_of_order_steps_are_rejected(self) -> None:
        with self.assertRaises(PipelineOrderError):
            Pipeline().validate_body(AddBadgeRequest).check_identifier()
        with self.assertRaises(PipelineOrderError):
            Pipeline().require_token().check_identifier().require_role(Role.ADMIN)
        with self.assertRaises(PipelineOrderError):
            Pipeline().require_token().require_token()


class PipelineApiTests(ApiTestCase):
    def test_missing_token_wins_over_bad_identifier_and_body(self) -> None:
        response = self.client.request("DELETE", "/api/v1/badge/delete/not-a-valid-id", json={"junk": True})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), MISSING_TOKEN)

    def test_malformed_identifier_short_circuits_body_validation(self) -> None:
        _, headers = self.login_as(Role.VENDOR, verified_vendor=True)

        with patch("ballers_api.routes.pipeline.validate_payload") as validate:
            response = self.client.put("/api/v1/property/update/not-a-valid-id", headers=headers, json={"name": ""})

        self.assertEqual(response.status_code, 412)
        self.assertEqual(response.json()["message"], "Invalid Id supplied")
        validate.assert_not_called()

    def test_malformed_identifier_never_reaches_handler(self) -> None:
        _, headers = self.login_as(Role.ADMIN)

        with patch.object(BadgeService, "delete_badge") as delete_badge:
            response = self.client.delete("/api/v1/badge/delete/xyz", headers=headers)

        self.assertEqual(response.status_code, 412)
        delete_badge.assert_not_called()

    def test_invalid_token(self) -> None:
        response = self.client.get("/api/v1/user/who-am-i", headers={"Authorization": "Bearer forged.token"})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Invalid token")

    def test_token_for_deleted_user_is_invalid(self) -> None:
        user, headers = self.login_as(Role.USER)
        self.store.collection("users").delete_by_id(user["id"])

        response = self.client.get("/api/v1/user/who-am-i", headers=headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Invalid token")

    def test_raw_and_bearer_tokens_are_accepted(self) -> None:
        user = self.add_user()
        token = self.context.tokens.issue(user["id"])

        for header in (f"Bearer {token}", token):
            with self.subTest(header=header[:7]):
                response = self.client.get("/api/v1/user/who-am-i", headers={"Authorization": header})
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["user"]["id"], user["id"])

    def test_role_guard_precedes_body_validation(self) -> None:
        _, headers = self.login_as(Role.USER)

        response = self.client.post("/api/v1/badge/add", headers=headers, json={})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], FORBIDDEN)

    def test_unverified_vendor_cannot_add_property(self) -> None:
        _, headers = self.login_as(Role.VENDOR, verified_vendor=False)

        response = self.client.post("/api/v1/property/add", headers=headers, json={})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], FORBIDDEN)

    def test_body_validation_failure_blocks_writes(self) -> None:
        _, headers = self.login_as(Role.ADMIN)
        writes = self.store.write_count

        response = self.client.post("/api/v1/badge/add", headers=headers, json={"assignedRole": "user"})

        self.assertEqual(response.status_code, 412)
        self.assertEqual(response.json()["message"], '"Name" is required')
        self.assertEqual(self.store.write_count, writes)

    def test_non_json_body(self) -> None:
        _, headers = self.login_as(Role.ADMIN)

        response = self.client.post(
            "/api/v1/badge/add",
            headers={**headers, "Content-Type": "text/plain"},
            content=b"name=Pioneer",
        )

        self.assertEqual(response.status_code, 412)
        self.assertEqual(response.json()["message"], '"value" must be of type object')


if __name__ == "__main__":
    unittest.main()
