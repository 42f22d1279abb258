from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    Text,
    Boolean,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import ApprovalStatus


class VenueRequest(Base):
    __tablename__ = "venue_requests"

    request_id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)
    latitude = Column(Float, default=0)
    longitude = Column(Float, default=0)
    reason = Column(Text, default="")

    status = Column(String, nullable=False, default=ApprovalStatus.PENDING.value)
    admin_comment = Column(Text)
    tracking_token = Column(String(32), unique=True, index=True, nullable=False)
    deleted = Column(Boolean, nullable=False, default=False)

    organizer_id = Column(
        Integer, ForeignKey("organizers.organizer_id"), nullable=False, index=True
    )
    # Venue created when this request was approved
    venue_id = Column(Integer, ForeignKey("venues.venue_id"))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    organizer = relationship("Organizer", back_populates="venue_requests")
    venue = relationship("Venue")
