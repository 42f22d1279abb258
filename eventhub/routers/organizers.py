from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.organizer import Organizer
from ..models.user import User
from ..services.organizer_service import OrganizerService
from ..services.request_service import RequestService
from ..schemas.organizer import OrganizerRequestCreate, OrganizerResponse
from ..schemas.requests import (
    OrganizerRequestResponse,
    RequestSubmitted,
    UserRequestResponse,
    VenueRequestCreate,
    VenueRequestResponse,
)
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import require_admin, require_organizer

router = APIRouter(tags=["organizers"])

TRACKED_SCHEMAS = {
    "organizer": OrganizerRequestResponse,
    "venue": VenueRequestResponse,
    "user": UserRequestResponse,
}


@router.post("/request", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def submit_organizer_request(
    request_data: OrganizerRequestCreate, db: Session = Depends(get_db)
):
    """Apply to become an organizer; keep the tracking token to follow up"""
    request = RequestService(db).submit_organizer_request(request_data)

    return RouterResponse.created(
        data=RequestSubmitted(
            request_id=request.request_id,
            tracking_token=request.tracking_token,
            status=request.status,
            submitted_at=request.created_at,
        ),
        message="Registration request submitted successfully",
    )


@router.get("/status/{token}", response_model=Dict[str, Any])
@handle_service_errors
async def track_request(token: str, db: Session = Depends(get_db)):
    """Unauthenticated status lookup for any request queue"""
    request_type, request = RequestService(db).track_request(token)

    response = RouterResponse.success(
        data=TRACKED_SCHEMAS[request_type].model_validate(request)
    )
    response["data"]["type"] = request_type
    return response


@router.post("/venue-requests", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def submit_venue_request(
    request_data: VenueRequestCreate,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    request = RequestService(db).submit_venue_request(organizer.organizer_id, request_data)

    return RouterResponse.created(
        data=VenueRequestResponse.model_validate(request),
        message="Venue request submitted successfully",
    )


@router.get("/venue-requests", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_venue_requests(
    db: Session = Depends(get_db), organizer: Organizer = Depends(require_organizer)
):
    requests = RequestService(db).get_organizer_venue_requests(organizer.organizer_id)
    return RouterResponse.success(
        data=[VenueRequestResponse.model_validate(r) for r in requests]
    )


@router.get("", response_model=Dict[str, Any])
@handle_service_errors
async def list_organizers(
    db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    organizers = OrganizerService(db).list_organizers()
    return RouterResponse.success(
        data=[OrganizerResponse.model_validate(o) for o in organizers]
    )
