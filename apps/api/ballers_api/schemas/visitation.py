"""Visitation API schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from ballers_api.schemas.common import ApiModel, ObjectIdStr, UtcDatetime


class ScheduleVisitRequest(ApiModel):
    property_id: ObjectIdStr = Field(title="Property id")
    visitor_name: str = Field(min_length=1, title="Name")
    visitor_email: EmailStr | None = Field(default=None, title="Email address")
    visitor_phone: str = Field(min_length=11, max_length=14, title="Phone")
    visit_date: UtcDatetime = Field(title="Visit Date")


class Visitation(ApiModel):
    id: str
    property_id: str
    user_id: str
    vendor_id: str
    visitor_name: str
    visitor_email: str | None = None
    visitor_phone: str
    visit_date: datetime
    created_at: datetime


class VisitationResponse(ApiModel):
    success: bool = True
    message: str | None = None
    schedule: Visitation
