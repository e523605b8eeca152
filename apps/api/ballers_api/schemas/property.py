"""Property API schemas."""

from datetime import datetime

from pydantic import Field

from ballers_api.schemas.common import Address, ApiModel


class MapLocation(ApiModel):
    longitude: str | None = Field(default=None, title="Map location longitude")
    latitude: str | None = Field(default=None, title="Map location latitude")


class AddressUpdate(ApiModel):
    street1: str | None = Field(default=None, min_length=1, title="Street 1")
    street2: str | None = Field(default=None, title="Street 2")
    city: str | None = Field(default=None, min_length=1, title="City")
    state: str | None = Field(default=None, min_length=1, title="State")
    country: str | None = Field(default=None, min_length=1, title="Country")


class AddPropertyRequest(ApiModel):
    name: str = Field(min_length=1, title="Property name")
    title_document: str | None = Field(default=None, title="Property title document")
    address: Address = Field(title="Address")
    price: float = Field(ge=0, title="Property price")
    units: int = Field(ge=0, title="Property units")
    house_type: str = Field(min_length=1, title="Property type")
    bedrooms: int = Field(ge=0, title="Bedroom number")
    toilets: int = Field(ge=0, title="Toilet number")
    description: str = Field(min_length=1, title="Property description")
    floor_plans: str | None = Field(default=None, title="Property floor plans")
    map_location: MapLocation | None = Field(default=None, title="Map location")
    neighborhood: list[str] | None = Field(default=None, title="Property neighborhood")
    main_image: str | None = Field(default=None, title="Property main image")
    gallery: list[str] | None = Field(default=None, title="Property gallery")


class UpdatePropertyRequest(ApiModel):
    name: str | None = Field(default=None, min_length=1, title="Property name")
    title_document: str | None = Field(default=None, title="Property title document")
    address: AddressUpdate | None = Field(default=None, title="Address")
    price: float | None = Field(default=None, ge=0, title="Property price")
    units: int | None = Field(default=None, ge=0, title="Property units")
    house_type: str | None = Field(default=None, min_length=1, title="Property type")
    bedrooms: int | None = Field(default=None, ge=0, title="Bedroom number")
    toilets: int | None = Field(default=None, ge=0, title="Toilet number")
    description: str | None = Field(default=None, min_length=1, title="Property description")
    floor_plans: str | None = Field(default=None, title="Property floor plans")
    map_location: MapLocation | None = Field(default=None, title="Map location")
    neighborhood: list[str] | None = Field(default=None, title="Property neighborhood")
    main_image: str | None = Field(default=None, title="Property main image")
    gallery: list[str] | None = Field(default=None, title="Property gallery")


class Property(ApiModel):
    id: str
    name: str
    title_document: str | None = None
    address: Address
    price: float
    units: int
    house_type: str
    bedrooms: int
    toilets: int
    description: str
    floor_plans: str | None = None
    map_location: MapLocation | None = None
    neighborhood: list[str] | None = None
    main_image: str | None = None
    gallery: list[str] | None = None
    added_by: str
    updated_by: str
    created_at: datetime


class PropertyResponse(ApiModel):
    success: bool = True
    message: str | None = None
    property: Property
