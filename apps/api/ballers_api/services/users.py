"""User account service layer."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
import logging
import secrets

from ballers_api.adapters.auth import InvalidTokenError
from ballers_api.adapters.mail import MailMessage
from ballers_api.core.context import AppContext
from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.base import DuplicateKeyError
from ballers_api.repositories.memory import USERS
from ballers_api.schemas.auth import Principal, Role
from ballers_api.schemas.badge import AutomatedBadge
from ballers_api.schemas.notification import NotificationType
from ballers_api.schemas.user import LoggedInUser, LoginRequest, RegisterRequest, User
from ballers_api.services.badges import AssignedBadgeService
from ballers_api.services.notifications import NotificationService
from ballers_api.services.referrals import ReferralService

logger = logging.getLogger(__name__)

USER_FILTERS = (
    FilterField("firstName", "first_name", FilterKind.CONTAINS, sortable=True),
    FilterField("lastName", "last_name", FilterKind.CONTAINS, sortable=True),
    FilterField("email", "email"),
    FilterField("role", "role"),
    FilterField("activated", "activated", FilterKind.BOOLEAN),
    FilterField("verified", "vendor.verified", FilterKind.BOOLEAN),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)

_CODE_DIGITS = "0123456789"


def generate_referral_code(first_name: str) -> str:
    """Lowercase first two letters of the name followed by random digits, six characters at most."""
    name = "".join(first_name.split())
    digits = 6 - len(name) if len(name) < 2 else 4
    return name[:2].lower() + "".join(secrets.choice(_CODE_DIGITS) for _ in range(digits))


class UserService:
    def __init__(self, context: AppContext) -> None:
        self._context = context
        self._users = context.store.collection(USERS)
        self._badges = AssignedBadgeService(context.store)
        self._notifications = NotificationService(context.store)
        self._referrals = ReferralService(context.store, context.mailer, context.settings.host)

    def find_principal_by_id(self, user_id: str) -> Principal | None:
        record = self._users.find_by_id(user_id)
        if record is None:
            return None
        return Principal.model_validate(record)

    def register(self, *, payload: RegisterRequest) -> str:
        """Create the account and mail its activation token; returns a login token."""
        email = payload.email.lower()
        if self._users.find_one(Predicate.where(email=email)) is not None:
            raise ApiError(ErrorKind.CONFLICT, "Email is linked to another account")

        referrer = None
        if payload.referral_code:
            referrer = self._users.find_one(Predicate.where(referral_code=payload.referral_code))
            if referrer is None:
                raise ApiError(ErrorKind.CONFLICT, "Invalid referral code")

        company_name = payload.vendor.company_name if payload.vendor else None
        document = {
            "first_name": payload.first_name,
            "last_name": payload.last_name,
            "email": email,
            "phone": payload.phone,
            "password": self._context.passwords.hash(payload.password),
            "role": (Role.VENDOR if company_name else Role.USER).value,
            "referral_code": self._unique_referral_code(payload.first_name),
            "activated": False,
            "activation_date": None,
            "vendor": {"company_name": company_name, "verified": False} if company_name else None,
        }
        try:
            record = self._users.insert(document)
        except DuplicateKeyError as exc:
            raise ApiError(ErrorKind.CONFLICT, "Email is linked to another account") from exc

        logger.info(
            "user.registered user_id=%s role=%s",
            safe_log_identifier(record["id"], prefix="uid"),
            record["role"],
        )
        if referrer is not None:
            self._referrals.record_registration(
                referrer_id=referrer["id"],
                user_id=record["id"],
                email=email,
                first_name=payload.first_name,
            )

        activation_token = self._context.tokens.issue(record["id"], ttl=self._context.activation_ttl)
        self._context.mailer.send(
            MailMessage(
                to=email,
                subject="Activate your Ballers account",
                text=f"{self._context.settings.host}/activate?token={activation_token}",
            )
        )
        return self._context.tokens.issue(record["id"])

    def login(self, *, payload: LoginRequest) -> LoggedInUser:
        record = self._users.find_one(Predicate.where(email=payload.email.lower()))
        if record is None or not self._context.passwords.verify(payload.password, record.get("password", "")):
            logger.warning("user.login_rejected reason=invalid_credentials")
            raise ApiError(ErrorKind.UNAUTHORIZED, "Invalid email or password")
        if not record["activated"]:
            raise ApiError(ErrorKind.UNAUTHORIZED, "Your account needs to be activated.")

        return LoggedInUser.model_validate({**record, "token": self._context.tokens.issue(record["id"])})

    def activate(self, *, token: str) -> User:
        try:
            user_id = self._context.tokens.verify(token)
        except InvalidTokenError as exc:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found") from exc

        record = self._users.update_by_id(user_id, {"activated": True, "activation_date": datetime.now(UTC)})
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found")

        logger.info("user.activated user_id=%s", safe_log_identifier(user_id, prefix="uid"))
        self._badges.assign_automated_badge(user_id=user_id, automated_badge=AutomatedBadge.ACTIVATED_USER)
        return User.model_validate(record)

    def send_reset_password_link(self, *, email: str) -> None:
        record = self._users.find_one(Predicate.where(email=email.lower()))
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Your email address is not found.")

        token = self._context.tokens.issue(record["id"], ttl=self._context.reset_password_ttl)
        self._context.mailer.send(
            MailMessage(
                to=record["email"],
                subject="Password Reset",
                text=f"{self._context.settings.host}/change-password/{token}",
            )
        )
        logger.info("user.reset_link_sent user_id=%s", safe_log_identifier(record["id"], prefix="uid"))

    def reset_password(self, *, token: str, password: str) -> User:
        try:
            user_id = self._context.tokens.verify(token)
        except InvalidTokenError as exc:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found") from exc

        record = self._users.update_by_id(user_id, {"password": self._context.passwords.hash(password)})
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found")

        logger.info("user.password_changed user_id=%s", safe_log_identifier(user_id, prefix="uid"))
        self._context.mailer.send(
            MailMessage(
                to=record["email"],
                subject="Your password has been changed!",
                text=f"{self._context.settings.host}/reset-password",
            )
        )
        return User.model_validate(record)

    def upgrade_to_editor(self, *, user_id: str) -> User:
        return self._change_role(user_id, Role.EDITOR)

    def downgrade_to_user(self, *, user_id: str) -> User:
        return self._change_role(user_id, Role.USER)

    def get_user(self, *, user_id: str) -> User:
        record = self._users.find_by_id(user_id)
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found")
        return User.model_validate(record)

    def list_users(self, *, query: Mapping[str, str]) -> Page[User]:
        return paginate(
            query,
            self._users,
            USER_FILTERS,
            default_limit=self._context.settings.default_page_limit,
        ).map(User.model_validate)

    def verify_vendor(self, *, vendor_id: str, admin_id: str) -> User:
        record = self._users.find_by_id(vendor_id)
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found")
        if record["role"] != Role.VENDOR.value:
            raise ApiError(ErrorKind.CONFLICT, "User is not a vendor")

        updated = self._users.update_by_id(vendor_id, {"vendor.verified": True, "vendor.verified_by": admin_id})
        logger.info(
            "user.vendor_verified user_id=%s admin_id=%s",
            safe_log_identifier(vendor_id, prefix="uid"),
            safe_log_identifier(admin_id, prefix="uid"),
        )
        self._badges.assign_automated_badge(user_id=vendor_id, automated_badge=AutomatedBadge.VENDOR_VERIFIED)
        self._notifications.create(
            user_id=vendor_id,
            description="Your vendor account has been verified",
            type=NotificationType.SUCCESS,
        )
        return User.model_validate(updated)

    def _change_role(self, user_id: str, role: Role) -> User:
        if self._users.find_by_id(user_id) is None:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found")

        record = self._users.update_by_id(user_id, {"role": role.value})
        if record is None:
            raise ApiError(ErrorKind.WRITE_FAILURE, "Error updating user role")
        logger.info(
            "user.role_changed user_id=%s role=%s",
            safe_log_identifier(user_id, prefix="uid"),
            role.value,
        )
        return User.model_validate(record)

    def _unique_referral_code(self, first_name: str) -> str:
        while True:
            code = generate_referral_code(first_name)
            if self._users.find_one(Predicate.where(referral_code=code)) is None:
                return code
