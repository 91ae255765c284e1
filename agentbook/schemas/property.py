from decimal import Decimal
from typing import List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator
from typing_extensions import Annotated

from agentbook.schemas.common import RequestModel, as_money


class PropertyBase(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    location: str = Field(..., min_length=1, max_length=255)
    property_type: str = Field(..., min_length=1, max_length=64)
    price: Decimal = Field(..., ge=0)
    beds: int = Field(0, ge=0)
    baths: int = Field(0, ge=0)
    sqm: int = Field(..., gt=0)
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    license_number: Optional[str] = Field(None, max_length=64)

    @field_validator("price")
    @classmethod
    def round_price(cls, value):
        return as_money(value)

    @field_validator("amenities")
    @classmethod
    def dedupe_amenities(cls, value):
        return sorted({item.strip() for item in value if item and item.strip()})


class RentalPropertyCreate(PropertyBase):
    listing_type: Literal["rental"] = "rental"
    price_type: Literal["night", "week", "month"] = "night"
    status: Literal["draft", "active", "inactive"] = "draft"


class SalePropertyCreate(PropertyBase):
    listing_type: Literal["sale"]
    price_type: Literal["total"] = "total"
    status: Literal["draft", "active", "inactive", "sold"] = "draft"


PropertyCreate = Annotated[
    Union[RentalPropertyCreate, SalePropertyCreate],
    Field(discriminator="listing_type"),
]
property_create_adapter = TypeAdapter(PropertyCreate)


class PropertyUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    property_type: Optional[str] = Field(None, min_length=1, max_length=64)
    price: Optional[Decimal] = Field(None, ge=0)
    price_type: Optional[Literal["night", "week", "month", "total"]] = None
    beds: Optional[int] = Field(None, ge=0)
    baths: Optional[int] = Field(None, ge=0)
    sqm: Optional[int] = Field(None, gt=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    status: Optional[Literal["draft", "active", "inactive", "sold"]] = None
    license_number: Optional[str] = Field(None, max_length=64)

    @field_validator("price")
    @classmethod
    def round_price(cls, value):
        return None if value is None else as_money(value)

    @field_validator("amenities")
    @classmethod
    def dedupe_amenities(cls, value):
        if value is None:
            return None
        return sorted({item.strip() for item in value if item and item.strip()})


class PropertyFilters(RequestModel):
    """Conjunctive catalog filters; unset fields do not constrain."""

    location: Optional[str] = None
    property_type: Optional[str] = None
    listing_type: Optional[Literal["rental", "sale"]] = None
    status: Optional[Literal["draft", "active", "inactive", "sold"]] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    agent_id: Optional[int] = None
