from .permissions import (
    get_current_identity,
    get_current_account,
    require_user,
    require_organizer,
    require_admin,
    get_bank_gateway,
)

__all__ = [
    "get_current_identity",
    "get_current_account",
    "require_user",
    "require_organizer",
    "require_admin",
    "get_bank_gateway",
]
