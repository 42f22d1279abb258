from enum import Enum


class ApprovalStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class UserRole(str, Enum):
    USER = "user"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class OrganizerType(str, Enum):
    INDIVIDUAL = "Individual"
    COMPANY = "Company"
    NON_PROFIT = "Non-Profit"
    EDUCATIONAL = "Educational"


class VenueAvailability(str, Enum):
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    UNDER_MAINTENANCE = "Under Maintenance"
    BOOKED = "Booked"


class EventStatus(str, Enum):
    ACTIVE = "Active"
    CANCELLED = "Cancelled"


class EventType(str, Enum):
    MUSIC_CONCERT = "Music Concert"
    DANCE_PERFORMANCE = "Dance Performance"
    COMEDY_SHOW = "Comedy Show"
    THEATRE = "Theatre"
    WORKSHOP = "Workshop"
    CONFERENCE = "Conference"
    SEMINAR = "Seminar"
    EXHIBITION = "Exhibition"
    SPORTS_EVENT = "Sports Event"
    FESTIVAL = "Festival"
    FOOD_AND_BEVERAGE = "Food & Beverage"
    NETWORKING_EVENT = "Networking Event"
    CHARITY_EVENT = "Charity Event"
    AWARD_CEREMONY = "Award Ceremony"
    PRODUCT_LAUNCH = "Product Launch"
    OTHER = "Other"


class TicketStatus(str, Enum):
    CONFIRMED = "Confirmed"
    PAID = "Paid"


class PaymentStatus(str, Enum):
    COMPLETED = "Completed"
    FAILED = "Failed"


class ReviewAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class ApprovableKind(str, Enum):
    ORGANIZER = "organizer"
    ORGANIZER_REQUEST = "organizer_request"
    VENUE_REQUEST = "venue_request"
    USER_REQUEST = "user_request"
    USER = "user"
    EVENT = "event"
