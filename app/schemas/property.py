from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]
PropertyType = Literal["house", "apartment", "condo", "villa", "townhouse"]
PropertyStatus = Literal["available", "pending", "sold", "rented"]


class Location(BaseModel):
    address: NonEmptyStr
    city: NonEmptyStr
    state: NonEmptyStr
    zip_code: NonEmptyStr


def _dedupe(labels: list[str]) -> list[str]:
    seen: list[str] = []
    for label in labels:
        label = label.strip()
        if label and label not in seen:
            seen.append(label)
    return seen


class PropertyCreate(BaseModel):
    title: NonEmptyStr
    description: NonEmptyStr
    price: Price
    type: PropertyType
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    area: int = Field(ge=0)
    location: Location
    amenities: list[str] = []
    featured: bool = False
    status: PropertyStatus = "available"

    @field_validator("amenities")
    @classmethod
    def _unique_amenities(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class PropertyUpdate(BaseModel):
    """Partial update: only fields that were sent are applied."""

    title: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    price: Price | None = None
    type: PropertyType | None = None
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    area: int | None = Field(default=None, ge=0)
    location: Location | None = None
    amenities: list[str] | None = None
    featured: bool | None = None
    status: PropertyStatus | None = None

    @field_validator("amenities")
    @classmethod
    def _unique_amenities(cls, v: list[str] | None) -> list[str] | None:
        return _dedupe(v) if v is not None else v


class PropertyRead(BaseModel):
    id: str
    title: str
    description: str
    price: float
    type: str
    bedrooms: int
    bathrooms: int
    area: int
    location: Location
    amenities: list[str]
    featured: bool
    status: str
    images: list[str]
    version: int
    owner_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
