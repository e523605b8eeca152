"""User API schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, model_validator
from pydantic_core import PydanticCustomError

from ballers_api.schemas.auth import Role, VendorInfo
from ballers_api.schemas.common import ApiModel


class VendorCompany(ApiModel):
    company_name: str | None = Field(default=None, title="Company Name")


class RegisterRequest(ApiModel):
    first_name: str = Field(min_length=1, title="First Name")
    last_name: str = Field(min_length=1, title="Last Name")
    email: EmailStr = Field(title="Email Address")
    phone: str = Field(default="", title="Phone")
    password: str = Field(min_length=6, title="Password")
    confirm_password: str = Field(title="Confirm Password")
    vendor: VendorCompany | None = Field(default=None, title="Vendor")
    referral_code: str | None = Field(default=None, title="Referral Code")

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.confirm_password != self.password:
            raise PydanticCustomError("password_mismatch", "Password does not match")
        return self


class LoginRequest(ApiModel):
    email: EmailStr = Field(title="Email Address")
    password: str = Field(min_length=6, title="Password")


class ResetPasswordRequest(ApiModel):
    email: EmailStr = Field(title="Email Address")


class ChangePasswordRequest(ApiModel):
    password: str = Field(min_length=6, title="Password")
    confirm_password: str = Field(title="Confirm Password")

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordRequest":
        if self.confirm_password != self.password:
            raise PydanticCustomError("password_mismatch", "Password does not match")
        return self


class User(ApiModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    role: Role
    referral_code: str | None = None
    activated: bool = False
    activation_date: datetime | None = None
    vendor: VendorInfo | None = None
    created_at: datetime


class LoggedInUser(User):
    token: str


class TokenResponse(ApiModel):
    success: bool = True
    message: str
    token: str


class UserResponse(ApiModel):
    success: bool = True
    message: str | None = None
    user: User


class LoginResponse(ApiModel):
    success: bool = True
    message: str
    user: LoggedInUser
