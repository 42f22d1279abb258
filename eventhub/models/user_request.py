from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import ApprovalStatus


class UserRequest(Base):
    __tablename__ = "user_requests"

    request_id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    gender = Column(String, nullable=False)
    dob = Column(String, nullable=False)
    profile_picture = Column(String, default="")

    status = Column(String, nullable=False, default=ApprovalStatus.PENDING.value)
    tracking_token = Column(String(32), unique=True, index=True, nullable=False)
    rejection_reason = Column(Text)

    # User created when this request was approved
    user_id = Column(Integer, ForeignKey("users.user_id"))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User")
