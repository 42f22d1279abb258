from pydantic import EmailStr, Field, validator
from typing import Optional
from datetime import datetime
from .common import CamelModel
from ..models.enums import OrganizerType
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class OrganizerBase(CamelModel):
    organizer_type: OrganizerType
    organizer_name: str = Field(
        ..., min_length=1, max_length=AppConstants.MAX_NAME_LENGTH
    )
    email: EmailStr
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)

    @validator("organizer_name", "address")
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @validator("phone")
    def validate_phone(cls, v):
        if not ValidationHelpers.validate_phone(v):
            raise ValueError("Invalid phone number format")
        return v


class OrganizerRequestCreate(OrganizerBase):
    password: str = Field(..., min_length=AppConstants.MIN_PASSWORD_LENGTH)


class OrganizerUpdate(CamelModel):
    organizer_type: Optional[OrganizerType] = None
    organizer_name: Optional[str] = Field(
        None, min_length=1, max_length=AppConstants.MAX_NAME_LENGTH
    )
    phone: Optional[str] = None
    address: Optional[str] = None
    password: Optional[str] = Field(None, min_length=AppConstants.MIN_PASSWORD_LENGTH)


class OrganizerResponse(CamelModel):
    organizer_id: int
    organizer_type: str
    organizer_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    status: str
    rejection_reason: Optional[str] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
