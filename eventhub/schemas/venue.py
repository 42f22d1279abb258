from pydantic import Field
from typing import Optional
from datetime import datetime
from .common import CamelModel
from ..models.enums import VenueAvailability
from ..utils.constants import AppConstants


class VenueBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=AppConstants.MAX_NAME_LENGTH)
    address: str = Field(..., min_length=1)
    capacity: int = Field(..., gt=0, description="Maximum occupancy")
    latitude: float = Field(0.0, ge=-90, le=90)
    longitude: float = Field(0.0, ge=-180, le=180)


class VenueCreate(VenueBase):
    availability_status: VenueAvailability = VenueAvailability.AVAILABLE


class VenueUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=AppConstants.MAX_NAME_LENGTH)
    address: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, gt=0)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    availability_status: Optional[VenueAvailability] = None


class VenueResponse(VenueBase):
    venue_id: int
    availability_status: str
    admin_comment: Optional[str] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
