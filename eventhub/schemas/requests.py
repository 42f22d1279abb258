from pydantic import Field, model_validator
from typing import Optional
from datetime import datetime
from .common import CamelModel
from ..utils.constants import AppConstants, ResponseMessages


class VenueRequestCreate(CamelModel):
    """
    Accepts the full venue description or the short form
    {locationName, reason} used by older clients.
    """

    name: Optional[str] = Field(None, max_length=AppConstants.MAX_NAME_LENGTH)
    address: Optional[str] = None
    capacity: Optional[int] = Field(None, gt=0)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    reason: Optional[str] = Field("", max_length=AppConstants.MAX_TEXT_LENGTH)
    location_name: Optional[str] = Field(None, max_length=AppConstants.MAX_NAME_LENGTH)

    @model_validator(mode="after")
    def check_format(self):
        full = self.name and self.address and self.capacity
        legacy = self.location_name and self.reason
        if not full and not legacy:
            raise ValueError(ResponseMessages.VENUE_REQUEST_FIELDS)
        return self

    @property
    def is_legacy(self) -> bool:
        return not (self.name and self.address and self.capacity)


class OrganizerRequestResponse(CamelModel):
    request_id: int
    organizer_type: str
    organizer_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    status: str
    tracking_token: str
    rejection_reason: Optional[str] = None
    organizer_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserRequestResponse(CamelModel):
    request_id: int
    name: str
    email: str
    phone: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    profile_picture: Optional[str] = ""
    status: str
    tracking_token: str
    rejection_reason: Optional[str] = None
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VenueRequestResponse(CamelModel):
    request_id: int
    organizer_id: int
    name: str
    address: str
    capacity: int
    latitude: Optional[float] = 0.0
    longitude: Optional[float] = 0.0
    reason: Optional[str] = ""
    status: str
    admin_comment: Optional[str] = None
    tracking_token: str
    venue_id: Optional[int] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RequestSubmitted(CamelModel):
    request_id: int
    tracking_token: str
    status: str
    submitted_at: Optional[datetime] = None

