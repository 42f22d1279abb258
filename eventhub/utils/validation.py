import re
from typing import Optional
from .constants import AppConstants
from ..errors import ValidationError


class ValidationHelpers:
    @staticmethod
    def validate_phone(phone: str) -> bool:
        """Validate phone number format (flexible)"""
        if not phone:
            return True  # Optional field

        # Remove all non-numeric characters
        digits_only = re.sub(r"\D", "", phone)

        # Check if it's a reasonable length (7-15 digits)
        return 7 <= len(digits_only) <= 15

    @staticmethod
    def is_valid_tracking_token(token: str) -> bool:
        """32-character hex string (16 random bytes)"""
        return bool(token) and re.fullmatch(AppConstants.TRACKING_TOKEN_PATTERN, token) is not None

    @staticmethod
    def require_tracking_token(token: str) -> str:
        if not ValidationHelpers.is_valid_tracking_token(token):
            raise ValidationError(
                "Invalid tracking token format. Token should be a 32-character hexadecimal string."
            )
        return token

    @staticmethod
    def require_rejection_reason(reason: Optional[str]) -> str:
        """A rejection must carry a reason of at least the minimum length"""
        cleaned = (reason or "").strip()
        if not cleaned:
            raise ValidationError("Rejection reason is required")

        if len(cleaned) < AppConstants.MIN_REJECTION_REASON_LENGTH:
            raise ValidationError(
                f"Rejection reason must be at least "
                f"{AppConstants.MIN_REJECTION_REASON_LENGTH} characters"
            )
        return cleaned

    @staticmethod
    def sanitize_text(text: str, max_length: int = AppConstants.MAX_TEXT_LENGTH) -> str:
        """Strip and truncate text input"""
        if not text:
            return ""

        return text.strip()[:max_length]
