from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from ..errors import ConflictError, DuplicateError, NotFoundError
from ..models.enums import ApprovalStatus, UserRole
from ..models.user import User
from ..schemas.user import UserProfileUpdate, UserRegister
from ..utils.constants import ResponseMessages
from ..utils.security import get_password_hash
from ..utils.service_helpers import ServiceHelpers, write_transaction

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def register_user(self, data: UserRegister) -> User:
        """Self-registration: the account is Approved immediately"""
        email = data.email.lower()

        with write_transaction(self.db):
            if User.find_by_email(self.db, email):
                raise DuplicateError(ResponseMessages.EMAIL_ALREADY_REGISTERED)

            user = User(
                user_id=ServiceHelpers.next_id(self.db, User),
                name=data.name,
                email=email,
                password=get_password_hash(data.password),
                phone=data.phone,
                gender=data.gender,
                dob=data.dob,
                profile_picture=data.profile_picture or "",
                role=UserRole.USER.value,
                approval_status=ApprovalStatus.APPROVED.value,
            )
            self.db.add(user)

        logger.info(f"User {user.user_id} registered")
        return user

    def get_user(self, user_id: int) -> User:
        return ServiceHelpers.get_or_raise(self.db, User, user_id, "User")

    def update_profile(self, user_id: int, updates: UserProfileUpdate) -> User:
        with write_transaction(self.db):
            user = ServiceHelpers.get_or_raise(self.db, User, user_id, "User")

            changes = updates.model_dump(exclude_unset=True, exclude_none=True)
            password = changes.pop("password", None)
            for field, value in changes.items():
                setattr(user, field, value)

            if password:
                user.password = get_password_hash(password)

        return user

    def list_users(
        self, role: Optional[str] = None, include_deleted: bool = False
    ) -> List[User]:
        query = ServiceHelpers.active(self.db.query(User), User, include_deleted)
        if role:
            query = query.filter(User.role == role)
        return query.order_by(User.user_id).all()

    def deactivate_user(self, user_id: int) -> User:
        with write_transaction(self.db):
            user = ServiceHelpers.get_or_raise(self.db, User, user_id, "User")
            user.deleted = True

        logger.info(f"User {user_id} deactivated")
        return user

    def reactivate_user(self, user_id: int) -> User:
        with write_transaction(self.db):
            user = self.db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")

            if not user.deleted:
                raise ConflictError("User is already active")

            # Another live account may have claimed the email meanwhile
            if User.find_by_email(self.db, user.email):
                raise DuplicateError(ResponseMessages.EMAIL_ALREADY_REGISTERED)

            user.deleted = False

        logger.info(f"User {user_id} reactivated")
        return user
