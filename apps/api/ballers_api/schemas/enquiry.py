"""Enquiry API schemas."""

from datetime import date, datetime

from pydantic import EmailStr, Field

from ballers_api.schemas.common import Address, ApiModel, FutureDate, ObjectIdStr


class AddEnquiryRequest(ApiModel):
    title: str = Field(min_length=1, title="Title")
    property_id: ObjectIdStr = Field(title="Property ID")
    first_name: str = Field(min_length=1, title="First Name")
    other_name: str | None = Field(default=None, title="Other Name")
    last_name: str = Field(min_length=1, title="Last Name")
    address: Address = Field(title="Address")
    occupation: str = Field(min_length=1, title="Occupation")
    phone: str = Field(min_length=1, title="Phone")
    phone2: str | None = Field(default=None, title="Phone 2")
    email: EmailStr = Field(title="Email Address")
    name_on_title_document: str = Field(min_length=1, title="Name on Title Document")
    investment_frequency: str = Field(min_length=1, title="Investment Frequency")
    initial_investment_amount: float = Field(ge=0, title="Initial Investment Amount")
    periodic_investment_amount: float = Field(ge=0, title="Periodic Investment Amount")
    investment_start_date: FutureDate = Field(title="Investment Start Date")


class ApproveEnquiryRequest(ApiModel):
    enquiry_id: ObjectIdStr = Field(title="Enquiry Id")


class Enquiry(ApiModel):
    id: str
    title: str
    property_id: str
    user_id: str
    vendor_id: str
    first_name: str
    other_name: str | None = None
    last_name: str
    address: Address
    occupation: str
    phone: str
    phone2: str | None = None
    email: str
    name_on_title_document: str
    investment_frequency: str
    initial_investment_amount: float
    periodic_investment_amount: float
    investment_start_date: date
    approved: bool = False
    approved_by: str | None = None
    approval_date: datetime | None = None
    created_at: datetime


class EnquiryResponse(ApiModel):
    success: bool = True
    message: str | None = None
    enquiry: Enquiry
