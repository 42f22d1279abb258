from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import ApprovalStatus


class OrganizerRequest(Base):
    __tablename__ = "organizer_requests"

    request_id = Column(Integer, primary_key=True, index=True)
    organizer_type = Column(String, nullable=False)
    organizer_name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)

    status = Column(String, nullable=False, default=ApprovalStatus.PENDING.value)
    tracking_token = Column(String(32), unique=True, index=True, nullable=False)
    rejection_reason = Column(Text)

    # Organizer created when this request was approved
    organizer_id = Column(Integer, ForeignKey("organizers.organizer_id"))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    organizer = relationship("Organizer")
