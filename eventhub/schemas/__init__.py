from .common import CamelModel, HealthResponse
from .auth import LoginRequest, LoginResponse
from .user import UserRegister, UserRequestCreate, UserProfileUpdate, UserResponse
from .organizer import OrganizerRequestCreate, OrganizerUpdate, OrganizerResponse
from .venue import VenueCreate, VenueUpdate, VenueResponse
from .event import (
    EventCreate,
    EventUpdate,
    AdminEventUpdate,
    EventResponse,
    EventDetailResponse,
    RegisteredEventResponse,
    EventFilterParams,
    BookingSummary,
)
from .ticket import (
    TicketRegister,
    TicketTransfer,
    PaymentSimulate,
    BankPaymentRequest,
    TicketResponse,
    UserTicketResponse,
    PaymentResponse,
)
from .requests import (
    VenueRequestCreate,
    OrganizerRequestResponse,
    UserRequestResponse,
    VenueRequestResponse,
    RequestSubmitted,
)
from .approvals import ApproveRequest, RejectRequest, VenueReviewRequest
from .feedback import FeedbackCreate, FeedbackResponse
from .dashboard import AdminDashboard, PendingQueues

__all__ = [
    # Common
    "CamelModel",
    "HealthResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    # User
    "UserRegister",
    "UserRequestCreate",
    "UserProfileUpdate",
    "UserResponse",
    # Organizer
    "OrganizerRequestCreate",
    "OrganizerUpdate",
    "OrganizerResponse",
    # Venue
    "VenueCreate",
    "VenueUpdate",
    "VenueResponse",
    # Event
    "EventCreate",
    "EventUpdate",
    "AdminEventUpdate",
    "EventResponse",
    "EventDetailResponse",
    "RegisteredEventResponse",
    "EventFilterParams",
    "BookingSummary",
    # Ticket & payment
    "TicketRegister",
    "TicketTransfer",
    "PaymentSimulate",
    "BankPaymentRequest",
    "TicketResponse",
    "UserTicketResponse",
    "PaymentResponse",
    # Request queues
    "VenueRequestCreate",
    "OrganizerRequestResponse",
    "UserRequestResponse",
    "VenueRequestResponse",
    "RequestSubmitted",
    # Approvals
    "ApproveRequest",
    "RejectRequest",
    "VenueReviewRequest",
    # Feedback
    "FeedbackCreate",
    "FeedbackResponse",
    # Dashboard
    "AdminDashboard",
    "PendingQueues",
]
