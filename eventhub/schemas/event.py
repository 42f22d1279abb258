from pydantic import Field, validator
from typing import Optional
from datetime import datetime, timezone
from .common import CamelModel
from ..models.enums import EventType, EventStatus
from ..utils.constants import AppConstants


def _as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Event times are stored as naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class EventBase(CamelModel):
    event_name: str = Field(..., min_length=1, max_length=AppConstants.MAX_NAME_LENGTH)
    description: str = Field(..., min_length=1, max_length=AppConstants.MAX_TEXT_LENGTH)
    rules_and_restrictions: str = Field(
        ..., min_length=1, max_length=AppConstants.MAX_TEXT_LENGTH
    )
    type: EventType
    venue_id: int
    tickets_provided: int = Field(..., gt=0)
    max_tickets_per_user: int = Field(..., gt=0)
    ticket_price: float = Field(..., ge=0, description="Price per ticket")
    start_time: datetime
    end_time: datetime


class EventCreate(EventBase):
    @validator("event_name", "description", "rules_and_restrictions")
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @validator("start_time", "end_time")
    def normalize_time(cls, v):
        return _as_naive_utc(v)

    @validator("end_time")
    def end_after_start(cls, v, values):
        start = values.get("start_time")
        if start is not None and v <= start:
            raise ValueError("End time must be after start time")
        return v


class EventUpdate(CamelModel):
    event_name: Optional[str] = Field(
        None, min_length=1, max_length=AppConstants.MAX_NAME_LENGTH
    )
    description: Optional[str] = Field(
        None, min_length=1, max_length=AppConstants.MAX_TEXT_LENGTH
    )
    rules_and_restrictions: Optional[str] = Field(
        None, min_length=1, max_length=AppConstants.MAX_TEXT_LENGTH
    )
    type: Optional[EventType] = None
    venue_id: Optional[int] = None
    tickets_provided: Optional[int] = Field(None, gt=0)
    max_tickets_per_user: Optional[int] = Field(None, gt=0)
    ticket_price: Optional[float] = Field(None, ge=0)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @validator("start_time", "end_time")
    def normalize_time(cls, v):
        return _as_naive_utc(v)


class AdminEventUpdate(EventUpdate):
    """Admins may also change the lifecycle status"""

    status: Optional[EventStatus] = None
    admin_comment: Optional[str] = None


class EventResponse(EventBase):
    event_id: int
    organizer_id: int
    type: str
    status: str
    approval_status: str
    admin_comment: Optional[str] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EventDetailResponse(EventResponse):
    """Event enriched with the names callers display"""

    venue_name: str = ""
    venue_address: str = ""
    venue_capacity: int = 0
    venue_latitude: float = 0.0
    venue_longitude: float = 0.0
    organizer_name: str = ""
    organizer_type: str = ""
    tickets_sold: int = 0
    tickets_available: int = 0

    @classmethod
    def from_event(cls, event, tickets_sold: int = 0) -> "EventDetailResponse":
        data = EventResponse.model_validate(event).model_dump()
        venue = event.venue
        organizer = event.organizer
        if venue is not None:
            data.update(
                venue_name=venue.name or "",
                venue_address=venue.address or "",
                venue_capacity=venue.capacity or 0,
                venue_latitude=venue.latitude or 0.0,
                venue_longitude=venue.longitude or 0.0,
            )
        if organizer is not None:
            data.update(
                organizer_name=organizer.organizer_name or "",
                organizer_type=organizer.organizer_type or "",
            )
        data["tickets_sold"] = tickets_sold
        data["tickets_available"] = event.tickets_provided - tickets_sold
        return cls(**data)


class RegisteredEventResponse(EventResponse):
    """One row per ticket the caller holds"""

    venue_name: str = ""
    venue_address: str = ""
    venue_capacity: int = 0
    ticket_quantity: int
    ticket_id: int
    registered_at: Optional[datetime] = None

    @classmethod
    def from_ticket(cls, ticket) -> "RegisteredEventResponse":
        event = ticket.event
        data = EventResponse.model_validate(event).model_dump()
        if event.venue is not None:
            data.update(
                venue_name=event.venue.name or "",
                venue_address=event.venue.address or "",
                venue_capacity=event.venue.capacity or 0,
            )
        data.update(
            ticket_quantity=ticket.quantity,
            ticket_id=ticket.ticket_id,
            registered_at=ticket.created_at,
        )
        return cls(**data)


class EventFilterParams(CamelModel):
    type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    search: Optional[str] = None

    @validator("start_date", "end_date")
    def normalize_time(cls, v):
        return _as_naive_utc(v)


class BookingSummary(CamelModel):
    total_active_tickets: int = 0
    total_revenue: float = 0.0
