from .security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_access_token,
    generate_tracking_token,
)
from .constants import AppConstants, ResponseMessages, SAMPLE_VENUES
from .validation import ValidationHelpers
from .bank_gateway import BankGatewayClient, BankTransferResult

__all__ = [
    "verify_password", "get_password_hash", "create_access_token",
    "decode_access_token", "generate_tracking_token",
    "AppConstants", "ResponseMessages", "SAMPLE_VENUES",
    "ValidationHelpers",
    "BankGatewayClient", "BankTransferResult",
]
