class ResponseMessages:
    """Standard API response messages"""

    # Success messages
    SUCCESS = "Success"
    CREATED = "Created successfully"
    UPDATED = "Updated successfully"
    DELETED = "Deleted successfully"

    # Error messages
    EMAIL_ALREADY_REGISTERED = "Email already registered"
    PENDING_REQUEST_EXISTS = "You already have a pending request"
    INVALID_CREDENTIALS = "Invalid email or password"
    UNEXPECTED_ERROR = "An unexpected error occurred"
    STORAGE_UNAVAILABLE = "Storage is unavailable"
    VENUE_REQUEST_FIELDS = (
        "Either name, address and capacity or locationName and reason are required"
    )


# Application Constants
class AppConstants:
    # Approval workflow
    MIN_REJECTION_REASON_LENGTH = 10
    TRACKING_TOKEN_BYTES = 16
    TRACKING_TOKEN_PATTERN = r"[a-fA-F0-9]{32}"

    # Tickets
    DEFAULT_TICKET_TYPE = "Standard"
    DEFAULT_PAYMENT_METHOD = "Bank Transfer"
    BANK_SUCCESS_RESPONSE = "Transaction Successful"
    BANK_PAYMENT_REMARKS = "Event Ticket Purchase"

    # Legacy venue request format defaults
    LEGACY_VENUE_CAPACITY = 100
    LEGACY_VENUE_COORDINATE = 0.0

    # Validation Limits
    MIN_PASSWORD_LENGTH = 6
    MAX_NAME_LENGTH = 200
    MAX_TEXT_LENGTH = 5000


SAMPLE_VENUES = [
    {
        "name": "Grand Convention Center",
        "address": "123 Main Street, City Center",
        "capacity": 1000,
        "latitude": 40.7128,
        "longitude": -74.0060,
    },
    {
        "name": "Riverside Auditorium",
        "address": "456 River Road, Riverside",
        "capacity": 500,
        "latitude": 40.7580,
        "longitude": -73.9855,
    },
    {
        "name": "City Park Amphitheater",
        "address": "789 Park Avenue, Downtown",
        "capacity": 2000,
        "latitude": 40.7505,
        "longitude": -73.9934,
    },
]
