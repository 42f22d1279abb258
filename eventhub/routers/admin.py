from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.enums import ApprovableKind, ApprovalStatus, ReviewAction
from ..models.user import User
from ..services.approval_service import ApprovalService
from ..services.dashboard_service import DashboardService
from ..services.event_service import EventService
from ..services.organizer_service import OrganizerService
from ..services.user_service import UserService
from ..services.venue_service import VenueService
from ..schemas.approvals import ApproveRequest, RejectRequest, VenueReviewRequest
from ..schemas.event import AdminEventUpdate, EventResponse
from ..schemas.organizer import OrganizerResponse
from ..schemas.requests import (
    OrganizerRequestResponse,
    UserRequestResponse,
    VenueRequestResponse,
)
from ..schemas.user import UserResponse
from ..schemas.venue import VenueCreate, VenueResponse, VenueUpdate
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import require_admin

router = APIRouter(tags=["admin"])

REVIEW_MESSAGES = {
    ReviewAction.APPROVE: "Venue request approved successfully",
    ReviewAction.REJECT: "Venue request rejected successfully",
}


def _comment(body: Optional[ApproveRequest]) -> Optional[str]:
    return body.comment if body else None


def _reason(body: Optional[RejectRequest]) -> Optional[str]:
    return body.reason if body else None


# Users


@router.get("/users", response_model=Dict[str, Any])
@handle_service_errors
async def list_users(
    role: Optional[str] = Query(None, description="user or admin"),
    include_deleted: bool = Query(False, alias="includeDeleted"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    users = UserService(db).list_users(role=role, include_deleted=include_deleted)
    return RouterResponse.success(data=[UserResponse.model_validate(u) for u in users])


@router.delete("/users/{user_id}", response_model=Dict[str, Any])
@handle_service_errors
async def deactivate_user(
    user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    user = UserService(db).deactivate_user(user_id)
    return RouterResponse.success(
        data=UserResponse.model_validate(user), message="User deactivated successfully"
    )


@router.post("/users/{user_id}/reactivate", response_model=Dict[str, Any])
@handle_service_errors
async def reactivate_user(
    user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    user = UserService(db).reactivate_user(user_id)
    return RouterResponse.success(
        data=UserResponse.model_validate(user), message="User reactivated successfully"
    )


@router.post("/users/{user_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_user(
    user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    user = ApprovalService(db).approve(ApprovableKind.USER, user_id)
    return RouterResponse.success(
        data=UserResponse.model_validate(user), message="User approved successfully"
    )


@router.post("/users/{user_id}/reject", response_model=Dict[str, Any])
@handle_service_errors
async def reject_user(
    user_id: int,
    body: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = ApprovalService(db).reject(ApprovableKind.USER, user_id, _reason(body))
    return RouterResponse.success(
        data=UserResponse.model_validate(user), message="User rejected successfully"
    )


# Organizers


@router.get("/organizers", response_model=Dict[str, Any])
@handle_service_errors
async def list_organizers(
    include_deleted: bool = Query(False, alias="includeDeleted"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    organizers = OrganizerService(db).list_organizers(include_deleted=include_deleted)
    return RouterResponse.success(
        data=[OrganizerResponse.model_validate(o) for o in organizers]
    )


@router.post("/organizers/{organizer_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_organizer(
    organizer_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    organizer = ApprovalService(db).approve(ApprovableKind.ORGANIZER, organizer_id)
    return RouterResponse.success(
        data=OrganizerResponse.model_validate(organizer),
        message="Organizer approved successfully",
    )


@router.post("/organizers/{organizer_id}/reject", response_model=Dict[str, Any])
@handle_service_errors
async def reject_organizer(
    organizer_id: int,
    body: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    organizer = ApprovalService(db).reject(
        ApprovableKind.ORGANIZER, organizer_id, _reason(body)
    )
    return RouterResponse.success(
        data=OrganizerResponse.model_validate(organizer),
        message="Organizer rejected successfully",
    )


@router.delete("/organizers/{organizer_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_organizer(
    organizer_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    OrganizerService(db).delete_organizer(organizer_id)
    return RouterResponse.deleted(message="Organizer deleted successfully")


# Events


@router.get("/events", response_model=Dict[str, Any])
@handle_service_errors
async def list_events(
    include_deleted: bool = Query(False, alias="includeDeleted"),
    approval_status: Optional[ApprovalStatus] = Query(None, alias="approvalStatus"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    events = EventService(db).list_events(
        include_deleted=include_deleted, approval_status=approval_status
    )
    return RouterResponse.success(data=events)


@router.put("/events/{event_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_event(
    event_id: int,
    body: Optional[ApproveRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    event = ApprovalService(db).approve(ApprovableKind.EVENT, event_id, _comment(body))
    return RouterResponse.success(
        data=EventResponse.model_validate(event), message="Event approved successfully"
    )


@router.put("/events/{event_id}/reject", response_model=Dict[str, Any])
@handle_service_errors
async def reject_event(
    event_id: int,
    body: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    event = ApprovalService(db).reject(ApprovableKind.EVENT, event_id, _reason(body))
    return RouterResponse.success(
        data=EventResponse.model_validate(event), message="Event rejected successfully"
    )


@router.put("/events/{event_id}/cancel", response_model=Dict[str, Any])
@handle_service_errors
async def cancel_event(
    event_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    event = EventService(db).cancel_event(event_id)
    return RouterResponse.success(
        data=EventResponse.model_validate(event), message="Event cancelled successfully"
    )


@router.put("/events/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_event(
    event_id: int,
    updates: AdminEventUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    event = EventService(db).admin_update_event(event_id, updates)
    return RouterResponse.updated(
        data=EventResponse.model_validate(event), message="Event updated successfully"
    )


@router.delete("/events/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_event(
    event_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    EventService(db).delete_event(event_id)
    return RouterResponse.deleted(message="Event deleted successfully")


# Venues


@router.get("/venues", response_model=Dict[str, Any])
@handle_service_errors
async def list_venues(
    include_deleted: bool = Query(False, alias="includeDeleted"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    venues = VenueService(db).list_venues(include_deleted=include_deleted)
    return RouterResponse.success(data=[VenueResponse.model_validate(v) for v in venues])


@router.post("/venues", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_venue(
    venue_data: VenueCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    venue = VenueService(db).create_venue(venue_data)
    return RouterResponse.created(
        data=VenueResponse.model_validate(venue), message="Venue created successfully"
    )


@router.put("/venues/{venue_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_venue(
    venue_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    venue = VenueService(db).approve_venue(venue_id)
    return RouterResponse.success(
        data=VenueResponse.model_validate(venue), message="Venue approved successfully"
    )


@router.put("/venues/{venue_id}/reject", response_model=Dict[str, Any])
@handle_service_errors
async def reject_venue(
    venue_id: int,
    body: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    venue = VenueService(db).reject_venue(venue_id, _reason(body))
    return RouterResponse.success(
        data=VenueResponse.model_validate(venue), message="Venue rejected successfully"
    )


@router.put("/venues/{venue_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_venue(
    venue_id: int,
    updates: VenueUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    venue = VenueService(db).update_venue(venue_id, updates)
    return RouterResponse.updated(
        data=VenueResponse.model_validate(venue), message="Venue updated successfully"
    )


@router.delete("/venues/{venue_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_venue(
    venue_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    VenueService(db).delete_venue(venue_id)
    return RouterResponse.deleted(message="Venue deleted successfully")


# Request queues


@router.get("/organizer-requests", response_model=Dict[str, Any])
@handle_service_errors
async def list_organizer_requests(
    request_status: Optional[ApprovalStatus] = Query(ApprovalStatus.PENDING, alias="status"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    requests = ApprovalService(db).list_by_status(
        ApprovableKind.ORGANIZER_REQUEST, request_status
    )
    return RouterResponse.success(
        data=[OrganizerRequestResponse.model_validate(r) for r in requests]
    )


@router.post("/organizer-requests/{request_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_organizer_request(
    request_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    """Promote the request to an organizer account"""
    organizer = ApprovalService(db).promote_organizer_request(request_id)
    return RouterResponse.success(
        data=OrganizerResponse.model_validate(organizer),
        message="Organizer request approved successfully",
    )


@router.post("/organizer-requests/{request_id}/reject", response_model=Dict[str, Any])
@handle_service_errors
async def reject_organizer_request(
    request_id: int,
    body: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    request = ApprovalService(db).reject(
        ApprovableKind.ORGANIZER_REQUEST, request_id, _reason(body)
    )
    return RouterResponse.success(
        data=OrganizerRequestResponse.model_validate(request),
        message="Organizer request rejected successfully",
    )


@router.get("/user-requests", response_model=Dict[str, Any])
@handle_service_errors
async def list_user_requests(
    request_status: Optional[ApprovalStatus] = Query(ApprovalStatus.PENDING, alias="status"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    requests = ApprovalService(db).list_by_status(
        ApprovableKind.USER_REQUEST, request_status
    )
    return RouterResponse.success(
        data=[UserRequestResponse.model_validate(r) for r in requests]
    )


@router.post("/user-requests/{request_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_user_request(
    request_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    """Promote the request to a user account"""
    user = ApprovalService(db).promote_user_request(request_id)
    return RouterResponse.success(
        data=UserResponse.model_validate(user),
        message="User request approved successfully",
    )


@router.post("/user-requests/{request_id}/reject", response_model=Dict[str, Any])
@handle_service_errors
async def reject_user_request(
    request_id: int,
    body: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    request = ApprovalService(db).reject(
        ApprovableKind.USER_REQUEST, request_id, _reason(body)
    )
    return RouterResponse.success(
        data=UserRequestResponse.model_validate(request),
        message="User request rejected successfully",
    )


@router.get("/venue-requests/pending", response_model=Dict[str, Any])
@handle_service_errors
async def list_pending_venue_requests(
    db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    requests = ApprovalService(db).list_by_status(
        ApprovableKind.VENUE_REQUEST, ApprovalStatus.PENDING
    )
    return RouterResponse.success(
        data=[VenueRequestResponse.model_validate(r) for r in requests]
    )


@router.post("/venue-requests/{request_id}/review", response_model=Dict[str, Any])
@handle_service_errors
async def review_venue_request(
    request_id: int,
    review: VenueReviewRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Approve (creating the venue) or reject a venue request"""
    request = ApprovalService(db).review_venue_request(
        request_id, review.action, review.comment
    )
    return RouterResponse.success(
        data=VenueRequestResponse.model_validate(request),
        message=REVIEW_MESSAGES[review.action],
    )


# Dashboard


@router.get("/dashboard", response_model=Dict[str, Any])
@handle_service_errors
async def get_dashboard(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Headline counts and the pending review backlog"""
    dashboard = DashboardService(db).get_admin_dashboard()
    return RouterResponse.success(data=dashboard)
