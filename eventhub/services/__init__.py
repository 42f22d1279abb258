from .approval_service import ApprovalService, ApprovalWorkflow, WORKFLOWS
from .auth_service import AuthService, Identity, LoginResult
from .dashboard_service import DashboardService
from .event_service import EventService
from .organizer_service import OrganizerService
from .request_service import RequestService
from .ticket_service import TicketService
from .user_service import UserService
from .venue_service import VenueService

__all__ = [
    "ApprovalService",
    "ApprovalWorkflow",
    "WORKFLOWS",
    "AuthService",
    "Identity",
    "LoginResult",
    "DashboardService",
    "EventService",
    "OrganizerService",
    "RequestService",
    "TicketService",
    "UserService",
    "VenueService",
]
