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
from .enums import ApprovalStatus, EventStatus


class Event(Base):
    __tablename__ = "events"

    event_id = Column(Integer, primary_key=True, index=True)
    event_name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    rules_and_restrictions = Column(Text, nullable=False)
    type = Column(String, nullable=False)
    tickets_provided = Column(Integer, nullable=False)
    max_tickets_per_user = Column(Integer, nullable=False)
    ticket_price = Column(Float, nullable=False, default=0)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)

    # Lifecycle status and approval status are tracked separately
    status = Column(String, nullable=False, default=EventStatus.ACTIVE.value)
    approval_status = Column(
        String, nullable=False, default=ApprovalStatus.PENDING.value
    )
    admin_comment = Column(Text)
    deleted = Column(Boolean, nullable=False, default=False)

    organizer_id = Column(
        Integer, ForeignKey("organizers.organizer_id"), nullable=False, index=True
    )
    venue_id = Column(Integer, ForeignKey("venues.venue_id"), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    organizer = relationship("Organizer", back_populates="events")
    venue = relationship("Venue", back_populates="events")
    tickets = relationship("Ticket", back_populates="event")
    feedback = relationship("Feedback", back_populates="event")

    @property
    def is_open_for_registration(self) -> bool:
        return (
            self.status == EventStatus.ACTIVE.value
            and self.approval_status == ApprovalStatus.APPROVED.value
        )
