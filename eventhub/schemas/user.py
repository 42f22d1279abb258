from pydantic import EmailStr, Field, validator
from typing import Optional
from datetime import datetime
from .common import CamelModel
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class UserBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=AppConstants.MAX_NAME_LENGTH)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    gender: str = Field(..., min_length=1)
    dob: str = Field(..., min_length=1, description="Date of birth, YYYY-MM-DD")
    profile_picture: Optional[str] = ""

    @validator("name")
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @validator("phone")
    def validate_phone(cls, v):
        if not ValidationHelpers.validate_phone(v):
            raise ValueError("Invalid phone number format")
        return v


class UserRegister(UserBase):
    """Self-registration; the account is active immediately"""

    password: str = Field(..., min_length=AppConstants.MIN_PASSWORD_LENGTH)


class UserRequestCreate(UserBase):
    """Registration that waits in the admin review queue"""

    password: str = Field(..., min_length=AppConstants.MIN_PASSWORD_LENGTH)


class UserProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=AppConstants.MAX_NAME_LENGTH)
    phone: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    profile_picture: Optional[str] = None
    password: Optional[str] = Field(None, min_length=AppConstants.MIN_PASSWORD_LENGTH)

    @validator("phone")
    def validate_phone(cls, v):
        if v is not None and not ValidationHelpers.validate_phone(v):
            raise ValueError("Invalid phone number format")
        return v


class UserResponse(CamelModel):
    user_id: int
    name: str
    email: str
    phone: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    profile_picture: Optional[str] = ""
    role: str
    approval_status: str
    rejection_reason: Optional[str] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
