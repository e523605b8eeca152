"""Authentication schemas."""

from enum import Enum

from pydantic import Field

from ballers_api.schemas.common import ApiModel


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"
    VENDOR = "vendor"
    EDITOR = "editor"


class VendorInfo(ApiModel):
    company_name: str | None = None
    verified: bool = False


class Principal(ApiModel):
    """Authenticated actor for one request, rebuilt from the token and a user lookup."""

    id: str = Field(min_length=1)
    role: Role = Role.USER
    email: str
    first_name: str
    last_name: str
    activated: bool = False
    vendor: VendorInfo | None = None

    @property
    def is_verified_vendor(self) -> bool:
        return self.role is Role.VENDOR and self.vendor is not None and self.vendor.verified
