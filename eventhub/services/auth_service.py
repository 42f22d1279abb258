from dataclasses import dataclass
from typing import Union
import logging
from sqlalchemy.orm import Session
from ..errors import AuthenticationError, NotFoundError, PermissionDeniedError
from ..models.enums import ApprovalStatus, UserRole
from ..models.organizer import Organizer
from ..models.user import User
from ..utils.constants import ResponseMessages
from ..utils.security import create_access_token, verify_password

logger = logging.getLogger(__name__)

Account = Union[User, Organizer]


@dataclass
class Identity:
    """Who is calling, as asserted by a verified access token"""

    account_id: int
    account_type: str  # "user" or "organizer"
    email: str
    name: str


@dataclass
class LoginResult:
    token: str
    account: Account
    role: str

    @property
    def account_id(self) -> int:
        if isinstance(self.account, Organizer):
            return self.account.organizer_id
        return self.account.user_id

    @property
    def name(self) -> str:
        if isinstance(self.account, Organizer):
            return self.account.organizer_name
        return self.account.name


class AuthService:
    """
    Credential checks and token issuance. A token carries identity only;
    the business role is always read back from the account record.
    """

    def __init__(self, db: Session):
        self.db = db

    def login(self, email: str, password: str) -> LoginResult:
        email = email.lower()

        # Users first, then organizers
        account: Account = User.find_by_email(self.db, email)
        account_type = "user"
        if account is None:
            account = Organizer.find_by_email(self.db, email)
            account_type = "organizer"

        if account is None or not verify_password(password, account.password):
            logger.warning(f"Failed login attempt for {email}")
            raise AuthenticationError(ResponseMessages.INVALID_CREDENTIALS)

        self.ensure_can_sign_in(account)

        result = LoginResult(token="", account=account, role=self.role_of(account))
        result.token = create_access_token(
            {
                "sub": f"{account_type}:{result.account_id}",
                "account_id": result.account_id,
                "account_type": account_type,
                "email": account.email,
                "name": result.name,
            }
        )

        logger.info(f"{account_type} {result.account_id} logged in")
        return result

    def resolve(self, identity: Identity) -> Account:
        """Load the live account behind a token"""
        if identity.account_type == "organizer":
            account = self.db.get(Organizer, identity.account_id)
            label = "Organizer"
        else:
            account = self.db.get(User, identity.account_id)
            label = "User"

        if account is None or account.deleted:
            raise NotFoundError(f"{label} not found")

        return account

    @staticmethod
    def role_of(account: Account) -> str:
        if isinstance(account, Organizer):
            return UserRole.ORGANIZER.value
        return account.role or UserRole.USER.value

    @staticmethod
    def ensure_can_sign_in(account: Account) -> None:
        if isinstance(account, Organizer):
            if account.status != ApprovalStatus.APPROVED.value:
                raise PermissionDeniedError(
                    "Your organizer account is not approved yet. "
                    "Please wait for admin approval."
                )
        elif account.approval_status == ApprovalStatus.REJECTED.value:
            raise PermissionDeniedError("Your account has been rejected")
