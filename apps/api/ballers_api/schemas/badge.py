"""Badge API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from ballers_api.schemas.common import ApiModel, ObjectIdStr


class BadgeAccessLevel(str, Enum):
    ALL = "all"
    USER = "user"
    VENDOR = "vendor"


class AutomatedBadge(str, Enum):
    ACTIVATED_USER = "activated-user-badge"
    VENDOR_VERIFIED = "verified-vendor-badge"


class BadgeIcon(ApiModel):
    name: str | None = Field(default=None, title="Icon name")
    color: str | None = Field(default=None, title="Icon color")


class AddBadgeRequest(ApiModel):
    name: str = Field(min_length=1, title="Name")
    image: str | None = Field(default=None, title="Image")
    assigned_role: BadgeAccessLevel = Field(default=BadgeAccessLevel.ALL, title="Role")
    automated_badge: AutomatedBadge | None = Field(default=None, title="Automated Badge")
    icon: BadgeIcon | None = Field(default=None, title="Icon")


class UpdateBadgeRequest(ApiModel):
    id: ObjectIdStr = Field(title="Badge Id")
    name: str | None = Field(default=None, min_length=1, title="Name")
    image: str | None = Field(default=None, title="Image")
    assigned_role: BadgeAccessLevel | None = Field(default=None, title="Role")
    icon: BadgeIcon | None = Field(default=None, title="Icon")


class Badge(ApiModel):
    id: str
    name: str
    image: str | None = None
    assigned_role: BadgeAccessLevel
    automated_badge: AutomatedBadge | None = None
    icon: BadgeIcon | None = None
    added_by: str
    created_at: datetime


class BadgeResponse(ApiModel):
    success: bool = True
    message: str | None = None
    badge: Badge


class AssignBadgeRequest(ApiModel):
    badge_id: ObjectIdStr = Field(title="Badge Id")
    user_id: ObjectIdStr = Field(title="User Id")


class AssignedBadge(ApiModel):
    id: str
    badge_id: str
    user_id: str
    assigned_by: str
    badge: Badge | None = None
    created_at: datetime


class AssignedBadgeResponse(ApiModel):
    success: bool = True
    message: str | None = None
    assigned_badge: AssignedBadge
