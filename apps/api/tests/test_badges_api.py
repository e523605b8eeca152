"""Badge management and assignment API tests."""

from __future__ import annotations

import unittest

from ballers_api.repositories.memory import NOTIFICATIONS
from ballers_api.schemas.auth import Role
from support import ApiTestCase


class BadgeApiTests(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin, self.admin_headers = self.login_as(Role.ADMIN)

    def _add_badge(self, **payload) -> dict:
        response = self.client.post("/api/v1/badge/add", headers=self.admin_headers, json={"name": "Pioneer", **payload})
        self.assertEqual(response.status_code, 201)
        return response.json()["badge"]

    def test_add_and_get_badge(self) -> None:
        badge = self._add_badge(assignedRole="vendor", icon={"name": "star", "color": "gold"})

        self.assertEqual(badge["assignedRole"], "vendor")
        self.assertEqual(badge["addedBy"], self.admin["id"])

        fetched = self.client.get(f"/api/v1/badge/{badge['id']}", headers=self.admin_headers)
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["badge"]["icon"], {"name": "star", "color": "gold"})

        missing = self.client.get(f"/api/v1/badge/{'0' * 24}", headers=self.admin_headers)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "Badge not found")

    def test_update_badge(self) -> None:
        badge = self._add_badge()

        response = self.client.put(
            "/api/v1/badge/update",
            headers=self.admin_headers,
            json={"id": badge["id"], "name": "Trailblazer"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["badge"]["name"], "Trailblazer")
        self.assertEqual(response.json()["badge"]["assignedRole"], "all")

        missing = self.client.put("/api/v1/badge/update", headers=self.admin_headers, json={"id": "0" * 24})
        self.assertEqual(missing.status_code, 404)

        malformed = self.client.put("/api/v1/badge/update", headers=self.admin_headers, json={"id": "nope"})
        self.assertEqual(malformed.status_code, 412)
        self.assertEqual(malformed.json()["message"], '"Badge Id" must be a valid id')

    def test_badges_for_role(self) -> None:
        self._add_badge(name="Everyone")
        self._add_badge(name="Vendors", assignedRole="vendor")
        self._add_badge(name="Users", assignedRole="user")

        response = self.client.get("/api/v1/badge/role/vendor", headers=self.admin_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["name"] for item in response.json()["result"]], ["Everyone", "Vendors"])

    def test_badges_for_role_when_none_exist(self) -> None:
        response = self.client.get("/api/v1/badge/role/user", headers=self.admin_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "result": []})

    def test_list_badges_filters(self) -> None:
        self._add_badge(name="Early Bird")
        self._add_badge(name="Night Owl", assignedRole="user")

        response = self.client.get("/api/v1/badge/all?assignedRole=user", headers=self.admin_headers)

        self.assertEqual([item["name"] for item in response.json()["result"]], ["Night Owl"])

    def test_assign_and_delete_flow(self) -> None:
        badge = self._add_badge()
        user, user_headers = self.login_as(Role.USER)

        assigned = self.client.post(
            "/api/v1/assign-badge/add",
            headers=self.admin_headers,
            json={"badgeId": badge["id"], "userId": user["id"]},
        )
        self.assertEqual(assigned.status_code, 201)
        assigned_badge = assigned.json()["assignedBadge"]
        self.assertEqual(assigned_badge["badge"]["name"], "Pioneer")
        self.assertEqual(
            [item["user_id"] for item in self.store.collection(NOTIFICATIONS).find()],
            [user["id"]],
        )

        again = self.client.post(
            "/api/v1/assign-badge/add",
            headers=self.admin_headers,
            json={"badgeId": badge["id"], "userId": user["id"]},
        )
        self.assertEqual(again.status_code, 412)
        self.assertEqual(again.json()["message"], "Badge already assigned to user")

        mine = self.client.get("/api/v1/assign-badge/me", headers=user_headers)
        self.assertEqual([item["badgeId"] for item in mine.json()["result"]], [badge["id"]])

        for_user = self.client.get(f"/api/v1/assign-badge/user/{user['id']}", headers=self.admin_headers)
        self.assertEqual(len(for_user.json()["result"]), 1)

        blocked = self.client.delete(f"/api/v1/badge/delete/{badge['id']}", headers=self.admin_headers)
        self.assertEqual(blocked.status_code, 412)
        self.assertEqual(blocked.json()["message"], "Badge has been assigned to 1 user")

        removed = self.client.delete(f"/api/v1/assign-badge/delete/{assigned_badge['id']}", headers=self.admin_headers)
        self.assertEqual(removed.status_code, 200)

        deleted = self.client.delete(f"/api/v1/badge/delete/{badge['id']}", headers=self.admin_headers)
        self.assertEqual(deleted.status_code, 200)

    def test_assign_unknown_badge_or_user(self) -> None:
        badge = self._add_badge()
        user = self.add_user()

        no_badge = self.client.post(
            "/api/v1/assign-badge/add",
            headers=self.admin_headers,
            json={"badgeId": "0" * 24, "userId": user["id"]},
        )
        self.assertEqual(no_badge.status_code, 404)
        self.assertEqual(no_badge.json()["message"], "Badge not found")

        no_user = self.client.post(
            "/api/v1/assign-badge/add",
            headers=self.admin_headers,
            json={"badgeId": badge["id"], "userId": "0" * 24},
        )
        self.assertEqual(no_user.status_code, 404)
        self.assertEqual(no_user.json()["message"], "User not found")

    def test_only_triggered_automated_badges_are_accepted(self) -> None:
        response = self.client.post(
            "/api/v1/badge/add",
            headers=self.admin_headers,
            json={"name": "First Sale", "automatedBadge": "first-sale-vendor-badge"},
        )

        self.assertEqual(response.status_code, 412)
        self.assertEqual(
            response.json()["message"],
            '"Automated Badge" must be one of [activated-user-badge, verified-vendor-badge]',
        )

    def test_verified_vendor_badge_is_automated(self) -> None:
        self._add_badge(name="Verified", assignedRole="vendor", automatedBadge="verified-vendor-badge")
        vendor, vendor_headers = self.login_as(Role.VENDOR)

        self.client.put(f"/api/v1/user/vendor/verify/{vendor['id']}", headers=self.admin_headers)

        mine = self.client.get("/api/v1/assign-badge/me", headers=vendor_headers).json()["result"]
        self.assertEqual([item["badge"]["name"] for item in mine], ["Verified"])
        self.assertEqual(mine[0]["assignedBy"], "system")


if __name__ == "__main__":
    unittest.main()
