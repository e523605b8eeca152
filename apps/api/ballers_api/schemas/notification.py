"""Notification API schemas."""

from datetime import datetime
from enum import Enum

from ballers_api.schemas.common import ApiModel


class NotificationType(str, Enum):
    DANGER = "danger"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


class Notification(ApiModel):
    id: str
    user_id: str
    description: str
    type: NotificationType
    url: str | None = None
    read: bool = False
    created_at: datetime


class NotificationResponse(ApiModel):
    success: bool = True
    message: str | None = None
    notification: Notification
