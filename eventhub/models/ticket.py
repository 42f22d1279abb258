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
from .enums import TicketStatus


class Ticket(Base):
    __tablename__ = "tickets"

    ticket_id = Column(Integer, primary_key=True, index=True)
    quantity = Column(Integer, nullable=False)
    ticket_type = Column(String, nullable=False, default="Standard")
    # Fixed at purchase time: quantity x event.ticket_price
    total_price = Column(Float, nullable=False)
    status = Column(String, nullable=False, default=TicketStatus.CONFIRMED.value)

    # Set when ownership changes hands
    transferred_at = Column(DateTime(timezone=True))
    transfer_reason = Column(Text)
    deleted = Column(Boolean, nullable=False, default=False)

    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    event_id = Column(
        Integer, ForeignKey("events.event_id"), nullable=False, index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="tickets")
    event = relationship("Event", back_populates="tickets")
    payments = relationship("Payment", back_populates="ticket")
