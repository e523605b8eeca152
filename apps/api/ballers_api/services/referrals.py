"""Referral service layer."""

from collections.abc import Mapping
import logging

from ballers_api.adapters.mail import MailMessage, Mailer
from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.memory import REFERRALS, USERS, InMemoryStore
from ballers_api.schemas.auth import Principal
from ballers_api.schemas.referral import Referral, ReferralInvite, ReferralInviteRequest, ReferralStatus

logger = logging.getLogger(__name__)

REFERRAL_FILTERS = (
    FilterField("status", "status"),
    FilterField("referrerId", "referrer_id"),
)


class ReferralService:
    def __init__(
        self,
        store: InMemoryStore,
        mailer: Mailer,
        host: str,
        *,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self._default_limit = default_limit
        self._referrals = store.collection(REFERRALS)
        self._users = store.collection(USERS)
        self._mailer = mailer
        self._host = host

    def invite(self, *, referrer: Principal, payload: ReferralInviteRequest) -> ReferralInvite:
        email = payload.email.lower()
        if self._users.find_one(Predicate.where(email=email)) is not None:
            raise ApiError(ErrorKind.CONFLICT, f"{email} has already registered on Ballers.")
        if self._referrals.find_one(Predicate.where(email=email, referrer_id=referrer.id)) is not None:
            raise ApiError(ErrorKind.CONFLICT, "Multiple invites cannot be sent to same email")

        referrer_record = self._users.find_by_id(referrer.id) or {}
        referral_code = referrer_record.get("referral_code") or ""
        record = self._referrals.insert(
            {
                "referrer_id": referrer.id,
                "email": email,
                "first_name": payload.first_name,
                "status": ReferralStatus.SENT.value,
            }
        )
        self._mailer.send(
            MailMessage(
                to=email,
                subject=f"{referrer.first_name} invited you to Ballers",
                text=f"Sign up at {self._host}/register?ref={referral_code}",
            )
        )
        logger.info("referral.invited referrer_id=%s", safe_log_identifier(referrer.id, prefix="uid"))
        return ReferralInvite(
            id=record["id"],
            email=email,
            referrer_name=referrer.first_name,
            referral_code=referral_code,
        )

    def record_registration(self, *, referrer_id: str, user_id: str, email: str, first_name: str) -> Referral:
        """Mark the referrer's pending invite as registered, creating one when it was never sent."""
        invite = self._referrals.find_one(Predicate.where(email=email, referrer_id=referrer_id))
        changes = {"user_id": user_id, "status": ReferralStatus.REGISTERED.value}
        if invite is None:
            record = self._referrals.insert(
                {"referrer_id": referrer_id, "email": email, "first_name": first_name, **changes}
            )
        else:
            record = self._referrals.update_by_id(invite["id"], changes)
        return Referral.model_validate(record)

    def list_referrals(self, *, query: Mapping[str, str]) -> Page[Referral]:
        page = paginate(query, self._referrals, REFERRAL_FILTERS, default_limit=self._default_limit)
        return page.map(Referral.model_validate)

    def list_for_referrer(self, *, referrer_id: str, query: Mapping[str, str]) -> Page[Referral]:
        page = paginate(
            query,
            self._referrals,
            REFERRAL_FILTERS[:1],
            base=Predicate.where(referrer_id=referrer_id),
            default_limit=self._default_limit,
        )
        return page.map(Referral.model_validate)
