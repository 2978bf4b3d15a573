import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from studel.models.user import Role


class UserRegistration(BaseModel):
    name: str = Field(..., description="Display name.")
    role: Role
    phone: Optional[str] = None
    email: Optional[str] = None
    campus_id: Optional[str] = Field(None, description="Required for runners.")
    vendor_id: Optional[uuid.UUID] = Field(None, description="Required for canteen staff.")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    role: Role
    phone: Optional[str] = None
    email: Optional[str] = None
    campus_id: Optional[str] = None
    is_approved: bool
    vendor_id: Optional[uuid.UUID] = None
