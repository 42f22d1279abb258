from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import ApprovalStatus


class Organizer(Base):
    __tablename__ = "organizers"

    organizer_id = Column(Integer, primary_key=True, index=True)
    organizer_type = Column(String, nullable=False)
    organizer_name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String)
    address = Column(String)

    # Organizers only exist after a request is approved
    status = Column(String, nullable=False, default=ApprovalStatus.APPROVED.value)
    rejection_reason = Column(Text)
    deleted = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    events = relationship("Event", back_populates="organizer")
    venue_requests = relationship("VenueRequest", back_populates="organizer")

    @classmethod
    def find_by_email(cls, db_session, email: str):
        """Find non-deleted organizer by email"""
        return (
            db_session.query(cls)
            .filter(cls.email == email, cls.deleted == False)
            .first()
        )
