"""Referral API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field

from ballers_api.schemas.common import ApiModel


class ReferralStatus(str, Enum):
    SENT = "Sent"
    REGISTERED = "Registered"


class ReferralInviteRequest(ApiModel):
    email: EmailStr = Field(title="Email Address")
    first_name: str | None = Field(default=None, min_length=1, title="First Name")


class Referral(ApiModel):
    id: str
    referrer_id: str
    user_id: str | None = None
    email: str
    first_name: str | None = None
    status: ReferralStatus
    created_at: datetime


class ReferralInvite(ApiModel):
    id: str
    email: str
    referrer_name: str
    referral_code: str


class ReferralInviteResponse(ApiModel):
    success: bool = True
    message: str
    referral: ReferralInvite
