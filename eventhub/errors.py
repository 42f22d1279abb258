class EventHubServiceError(Exception):
    """Base exception for service errors"""

    pass


class ValidationError(EventHubServiceError):
    """Missing or malformed input, or a business rule violation"""

    pass


class DuplicateError(ValidationError):
    """A pending request or live record already uses this email"""

    pass


class NotFoundError(EventHubServiceError):
    """Entity or request does not exist or is soft-deleted"""

    pass


class ConflictError(EventHubServiceError):
    """Operation not valid for the record's current state"""

    pass


class PermissionDeniedError(EventHubServiceError):
    """Permission denied for operation"""

    pass


class StorageError(EventHubServiceError):
    """Persistence read/write failure"""

    pass


class PaymentFailedError(EventHubServiceError):
    """External bank gateway declined or could not be reached"""

    pass


class AuthenticationError(EventHubServiceError):
    """Unknown email or wrong password"""

    pass
