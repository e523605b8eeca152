"""Payload validation message tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import unittest

from ballers_api.domain.validation import validate_payload
from ballers_api.schemas.badge import AddBadgeRequest, AssignBadgeRequest
from ballers_api.schemas.enquiry import AddEnquiryRequest
from ballers_api.schemas.property import AddPropertyRequest
from ballers_api.schemas.user import LoginRequest, RegisterRequest
from ballers_api.schemas.visitation import ScheduleVisitRequest


def _register_payload(**overrides) -> dict:
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@ballers.com",
        "phone": "08012345678",
        "password": "123456",
        "confirmPassword": "123456",
    }
    payload.update(overrides)
    return payload


class ValidatePayloadTests(unittest.TestCase):
    def test_valid_payload_is_normalized(self) -> None:
        result = validate_payload(RegisterRequest, {**_register_payload(), "isAdmin": True})

        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.value.first_name, "Ada")
        self.assertFalse(hasattr(result.value, "is_admin"))

    def test_non_object_payload(self) -> None:
        for payload in (None, [], "text", 12):
            with self.subTest(payload=payload):
                result = validate_payload(LoginRequest, payload)
                self.assertFalse(result.ok)
                self.assertEqual(result.error, '"value" must be of type object')

    def test_missing_field_uses_label(self) -> None:
        result = validate_payload(LoginRequest, {"password": "123456"})
        self.assertEqual(result.error, '"Email Address" is required')

    def test_only_first_violation_in_declaration_order_is_reported(self) -> None:
        result = validate_payload(RegisterRequest, _register_payload(firstName="", email="not-an-email"))
        self.assertEqual(result.error, '"First Name" is not allowed to be empty')

    def test_email_message(self) -> None:
        result = validate_payload(LoginRequest, {"email": "not-an-email", "password": "123456"})
        self.assertEqual(result.error, '"Email Address" must be a valid email')

    def test_length_message(self) -> None:
        result = validate_payload(LoginRequest, {"email": "ada@ballers.com", "password": "123"})
        self.assertEqual(result.error, '"Password" length must be at least 6 characters long')

    def test_password_mismatch_uses_custom_message(self) -> None:
        result = validate_payload(RegisterRequest, _register_payload(confirmPassword="654321"))
        self.assertEqual(result.error, "Password does not match")

    def test_number_and_nested_labels(self) -> None:
        payload = {
            "name": "Lekki Gardens",
            "address": {"street1": "12 Admiralty Way", "city": "Lekki"},
            "price": "cheap",
        }
        result = validate_payload(AddPropertyRequest, payload)
        self.assertEqual(result.error, '"State" is required')

        payload["address"]["state"] = "Lagos"
        result = validate_payload(AddPropertyRequest, payload)
        self.assertEqual(result.error, '"Property price" must be a number')

    def test_enum_lists_allowed_values(self) -> None:
        result = validate_payload(AddBadgeRequest, {"name": "Pioneer", "assignedRole": "admin"})
        self.assertEqual(result.error, '"Role" must be one of [all, user, vendor]')

    def test_defaults_are_applied(self) -> None:
        result = validate_payload(AddBadgeRequest, {"name": "Pioneer"})
        self.assertEqual(result.value.assigned_role.value, "all")

    def test_identifier_fields(self) -> None:
        result = validate_payload(AssignBadgeRequest, {"badgeId": "123", "userId": "a" * 24})
        self.assertEqual(result.error, '"Badge Id" must be a valid id')

    def test_phone_bounds_and_date(self) -> None:
        payload = {
            "propertyId": "a" * 24,
            "visitorName": "Ada",
            "visitorPhone": "0801",
            "visitDate": "2030-01-01T10:00:00",
        }
        result = validate_payload(ScheduleVisitRequest, payload)
        self.assertEqual(result.error, '"Phone" length must be at least 11 characters long')

        payload["visitorPhone"] = "08012345678"
        payload["visitDate"] = "someday"
        result = validate_payload(ScheduleVisitRequest, payload)
        self.assertEqual(result.error, '"Visit Date" must be a valid date')

        payload["visitDate"] = "2030-01-01T10:00:00"
        result = validate_payload(ScheduleVisitRequest, payload)
        self.assertTrue(result.ok)
        self.assertEqual(result.value.visit_date.tzinfo, UTC)

    def test_future_date(self) -> None:
        today = datetime.now(UTC).date()
        payload = {
            "title": "Enquiry",
            "propertyId": "a" * 24,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "address": {"street1": "1 Way", "city": "Lekki", "state": "Lagos"},
            "occupation": "Engineer",
            "phone": "08012345678",
            "email": "ada@ballers.com",
            "nameOnTitleDocument": "Ada Lovelace",
            "investmentFrequency": "monthly",
            "initialInvestmentAmount": 100,
            "periodicInvestmentAmount": 10,
            "investmentStartDate": today.isoformat(),
        }
        result = validate_payload(AddEnquiryRequest, payload)
        self.assertEqual(
            result.error,
            f'"Investment Start Date" should be a date later than {today.strftime("%a, %d %b %Y")}',
        )

        payload["investmentStartDate"] = (today + timedelta(days=2)).isoformat()
        self.assertTrue(validate_payload(AddEnquiryRequest, payload).ok)


if __name__ == "__main__":
    unittest.main()
