from .user import User
from .organizer import Organizer
from .venue import Venue
from .event import Event
from .ticket import Ticket
from .payment import Payment
from .feedback import Feedback
from .organizer_request import OrganizerRequest
from .venue_request import VenueRequest
from .user_request import UserRequest


__all__ = [
    "User",
    "Organizer",
    "Venue",
    "Event",
    "Ticket",
    "Payment",
    "Feedback",
    "OrganizerRequest",
    "VenueRequest",
    "UserRequest",
]
