"""Enquiry and visitation API tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import unittest

from ballers_api.repositories.memory import NOTIFICATIONS
from ballers_api.schemas.auth import Role
from support import ApiTestCase, property_payload


class _PropertyCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.vendor, self.vendor_headers = self.login_as(Role.VENDOR, verified_vendor=True)
        self.user, self.user_headers = self.login_as(Role.USER)
        self.admin, self.admin_headers = self.login_as(Role.ADMIN)
        response = self.client.post("/api/v1/property/add", headers=self.vendor_headers, json=property_payload())
        self.property = response.json()["property"]

    def vendor_notifications(self) -> list[str]:
        return [
            item["description"]
            for item in self.store.collection(NOTIFICATIONS).find()
            if item["user_id"] == self.vendor["id"]
        ]


def _enquiry(property_id: str, **overrides) -> dict:
    payload = {
        "title": "Lekki Gardens enquiry",
        "propertyId": property_id,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "address": {"street1": "2 Marina", "city": "Lagos Island", "state": "Lagos"},
        "occupation": "Engineer",
        "phone": "08012345678",
        "email": "ada@ballers.com",
        "nameOnTitleDocument": "Ada Lovelace",
        "investmentFrequency": "monthly",
        "initialInvestmentAmount": 5_000_000,
        "periodicInvestmentAmount": 500_000,
        "investmentStartDate": (datetime.now(UTC).date() + timedelta(days=30)).isoformat(),
    }
    payload.update(overrides)
    return payload


class EnquiryApiTests(_PropertyCase):
    def _add(self, headers: dict[str, str] | None = None) -> dict:
        response = self.client.post(
            "/api/v1/enquiry/add",
            headers=headers or self.user_headers,
            json=_enquiry(self.property["id"]),
        )
        self.assertEqual(response.status_code, 201)
        return response.json()["enquiry"]

    def test_add_enquiry_notifies_vendor(self) -> None:
        enquiry = self._add()

        self.assertEqual(enquiry["vendorId"], self.vendor["id"])
        self.assertFalse(enquiry["approved"])
        self.assertEqual(self.vendor_notifications(), ["You have a new enquiry for Lekki Gardens"])

    def test_add_enquiry_for_missing_property(self) -> None:
        response = self.client.post("/api/v1/enquiry/add", headers=self.user_headers, json=_enquiry("0" * 24))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Property not found")

    def test_only_users_add_enquiries(self) -> None:
        response = self.client.post(
            "/api/v1/enquiry/add",
            headers=self.vendor_headers,
            json=_enquiry(self.property["id"]),
        )
        self.assertEqual(response.status_code, 403)

    def test_approve(self) -> None:
        enquiry = self._add()

        response = self.client.put("/api/v1/enquiry/approve", headers=self.admin_headers, json={"enquiryId": enquiry["id"]})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["enquiry"]["approved"])
        self.assertEqual(response.json()["enquiry"]["approvedBy"], self.admin["id"])

        missing = self.client.put("/api/v1/enquiry/approve", headers=self.admin_headers, json={"enquiryId": "0" * 24})
        self.assertEqual(missing.status_code, 404)

    def test_visibility(self) -> None:
        enquiry = self._add()
        _, stranger_headers = self.login_as(Role.USER)

        self.assertEqual(self.client.get(f"/api/v1/enquiry/{enquiry['id']}", headers=self.user_headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/v1/enquiry/{enquiry['id']}", headers=self.vendor_headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/v1/enquiry/{enquiry['id']}", headers=stranger_headers).status_code, 404)

        self.assertEqual(self.client.get("/api/v1/enquiry/all", headers=stranger_headers).json()["result"], [])
        self.assertEqual(len(self.client.get("/api/v1/enquiry/all", headers=self.admin_headers).json()["result"]), 1)
        approved = self.client.get("/api/v1/enquiry/all?approved=true", headers=self.vendor_headers).json()
        self.assertEqual(approved["pagination"]["total"], 0)


class VisitationApiTests(_PropertyCase):
    def _schedule(self, **overrides):
        payload = {
            "propertyId": self.property["id"],
            "visitorName": "Ada Lovelace",
            "visitorPhone": "08012345678",
            "visitDate": "2030-05-01T09:30:00Z",
            **overrides,
        }
        return self.client.post("/api/v1/visit/schedule", headers=self.user_headers, json=payload)

    def test_schedule_visit(self) -> None:
        response = self._schedule(visitorEmail="ada@ballers.com")

        self.assertEqual(response.status_code, 201)
        schedule = response.json()["schedule"]
        self.assertEqual(schedule["vendorId"], self.vendor["id"])
        self.assertEqual(schedule["userId"], self.user["id"])
        self.assertEqual(self.vendor_notifications(), ["A visit has been scheduled for Lekki Gardens"])

    def test_schedule_validation_and_missing_property(self) -> None:
        short_phone = self._schedule(visitorPhone="0801")
        self.assertEqual(short_phone.status_code, 412)
        self.assertEqual(short_phone.json()["message"], '"Phone" length must be at least 11 characters long')

        missing = self._schedule(propertyId="0" * 24)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "Property not found")

    def test_listing_scope_and_date_filter(self) -> None:
        self._schedule()
        self._schedule(visitDate="2030-05-02T23:00:00Z")
        _, other_headers = self.login_as(Role.VENDOR, verified_vendor=True)

        mine = self.client.get("/api/v1/visit/all", headers=self.vendor_headers).json()
        self.assertEqual(mine["pagination"]["total"], 2)

        theirs = self.client.get("/api/v1/visit/all", headers=other_headers).json()
        self.assertEqual(theirs["result"], [])

        on_day = self.client.get("/api/v1/visit/all?visitDate=2030-05-01", headers=self.admin_headers).json()
        self.assertEqual(on_day["pagination"]["total"], 1)

        self.assertEqual(self.client.get("/api/v1/visit/all", headers=self.user_headers).status_code, 403)


if __name__ == "__main__":
    unittest.main()
