from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from ..database import get_db
from ..errors import NotFoundError, PermissionDeniedError
from ..models.enums import UserRole
from ..models.organizer import Organizer
from ..models.user import User
from ..services.auth_service import Account, AuthService, Identity
from ..utils.bank_gateway import BankGatewayClient
from ..utils.security import JWTError, decode_access_token
import logging

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# Auth Helper Functions
async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Who is calling, taken from a verified bearer token"""
    if credentials is None:
        raise _credentials_exception("Access token required")

    try:
        claims = decode_access_token(credentials.credentials)
        return Identity(
            account_id=int(claims["account_id"]),
            account_type=claims["account_type"],
            email=claims["email"],
            name=claims.get("name", ""),
        )
    except (JWTError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Rejected access token: {e}")
        raise _credentials_exception("Invalid or expired token")


async def get_current_account(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> Account:
    """The live account behind the token; the role comes from this record"""
    auth_service = AuthService(db)
    try:
        account = auth_service.resolve(identity)
        auth_service.ensure_can_sign_in(account)
    except NotFoundError:
        raise _credentials_exception("Account no longer exists")
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    return account


def _access_denied() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


async def require_user(account: Account = Depends(get_current_account)) -> User:
    if not isinstance(account, User) or account.role != UserRole.USER.value:
        raise _access_denied()
    return account


async def require_organizer(
    account: Account = Depends(get_current_account),
) -> Organizer:
    if not isinstance(account, Organizer):
        raise _access_denied()
    return account


async def require_admin(account: Account = Depends(get_current_account)) -> User:
    if not isinstance(account, User) or not account.is_admin:
        raise _access_denied()
    return account


def get_bank_gateway() -> BankGatewayClient:
    return BankGatewayClient()
