from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.organizer import Organizer
from ..services.event_service import EventService
from ..services.organizer_service import OrganizerService
from ..schemas.event import EventCreate, EventDetailResponse, EventResponse, EventUpdate
from ..schemas.feedback import FeedbackResponse
from ..schemas.organizer import OrganizerResponse, OrganizerUpdate
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import require_organizer

router = APIRouter(tags=["organizer"])


@router.get("/events", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_events(
    db: Session = Depends(get_db), organizer: Organizer = Depends(require_organizer)
):
    events = EventService(db).get_organizer_events(organizer.organizer_id)
    return RouterResponse.success(data=events)


@router.get("/events/bookings/summary", response_model=Dict[str, Any])
@handle_service_errors
async def get_booking_summary(
    db: Session = Depends(get_db), organizer: Organizer = Depends(require_organizer)
):
    """Tickets sold and revenue across the organizer's events"""
    summary = OrganizerService(db).get_booking_summary(organizer.organizer_id)
    return RouterResponse.success(data=summary)


@router.get("/events/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_event(
    event_id: int,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    event_service = EventService(db)
    event = event_service.get_organizer_event(organizer.organizer_id, event_id)
    return RouterResponse.success(
        data=EventDetailResponse.from_event(event, event_service.tickets_sold(event_id))
    )


@router.post("/events", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    """Create an event; it stays Pending until an admin approves it"""
    event = EventService(db).create_event(organizer.organizer_id, event_data)

    return RouterResponse.created(
        data=EventResponse.model_validate(event),
        message="Event created successfully. Waiting for admin approval.",
    )


@router.put("/events/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_my_event(
    event_id: int,
    updates: EventUpdate,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    """Edit an event that has not been reviewed yet"""
    event = EventService(db).update_organizer_event(
        organizer.organizer_id, event_id, updates
    )

    return RouterResponse.updated(
        data=EventResponse.model_validate(event), message="Event updated successfully"
    )


@router.get("/events/{event_id}/feedback", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_feedback(
    event_id: int,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    feedback = EventService(db).get_event_feedback(organizer.organizer_id, event_id)
    return RouterResponse.success(data=[FeedbackResponse.from_feedback(f) for f in feedback])


@router.get("/profile", response_model=Dict[str, Any])
@handle_service_errors
async def get_profile(organizer: Organizer = Depends(require_organizer)):
    return RouterResponse.success(data=OrganizerResponse.model_validate(organizer))


@router.put("/profile", response_model=Dict[str, Any])
@handle_service_errors
async def update_profile(
    updates: OrganizerUpdate,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    updated = OrganizerService(db).update_profile(organizer.organizer_id, updates)

    return RouterResponse.updated(
        data=OrganizerResponse.model_validate(updated),
        message="Profile updated successfully",
    )
