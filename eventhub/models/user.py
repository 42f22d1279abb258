from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import ApprovalStatus, UserRole


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Unique only among non-deleted users, enforced by UserService
    email = Column(String, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String)
    gender = Column(String)
    dob = Column(String)
    profile_picture = Column(String, default="")

    role = Column(String, nullable=False, default=UserRole.USER.value)
    approval_status = Column(String, nullable=False, default=ApprovalStatus.APPROVED.value)
    rejection_reason = Column(Text)
    deleted = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    tickets = relationship("Ticket", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @classmethod
    def find_by_email(cls, db_session, email: str):
        """Find non-deleted user by email"""
        return (
            db_session.query(cls)
            .filter(cls.email == email, cls.deleted == False)
            .first()
        )
