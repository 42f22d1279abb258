from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    feedback_id = Column(Integer, primary_key=True, index=True)
    comments = Column(Text, nullable=False)
    deleted = Column(Boolean, nullable=False, default=False)

    event_id = Column(
        Integer, ForeignKey("events.event_id"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="feedback")
    user = relationship("User")
