import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VendorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    operating_hours: str
    image_url: str


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    vendor_id: uuid.UUID
    name: str
    description: str
    price: Decimal
    category: str
    is_available: bool


class DeliveryZoneResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    delivery_fee: Decimal


class AvailabilityUpdate(BaseModel):
    is_available: bool = Field(..., description="Whether customers can order this product.")


class DeliveryZoneUpdate(BaseModel):
    name: Optional[str] = Field(None, description="New display name for the zone.")
    delivery_fee: Optional[Decimal] = Field(None, description="New flat fee; existing orders keep theirs.")
