from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from .common import CamelModel
from ..utils.constants import AppConstants


class TicketRegister(CamelModel):
    event_id: int
    ticket_quantity: int = Field(..., gt=0)
    ticket_type: Optional[str] = AppConstants.DEFAULT_TICKET_TYPE


class TicketTransfer(CamelModel):
    ticket_id: int
    recipient_email: EmailStr
    reason: Optional[str] = Field("", max_length=AppConstants.MAX_TEXT_LENGTH)


class PaymentSimulate(CamelModel):
    ticket_id: int


class BankPaymentRequest(CamelModel):
    ticket_id: int
    from_account_number: str = Field(..., min_length=1)


class TicketResponse(CamelModel):
    ticket_id: int
    user_id: int
    event_id: int
    quantity: int
    ticket_type: str
    total_price: float
    status: str
    transferred_at: Optional[datetime] = None
    transfer_reason: Optional[str] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserTicketResponse(CamelModel):
    """A ticket joined with the event and venue it admits to"""

    ticket_id: int
    event_id: int
    event_name: str
    description: str
    type: str
    start_time: datetime
    end_time: datetime
    venue_name: str = ""
    venue_address: str = ""
    ticket_quantity: int
    ticket_type: str
    total_price: float
    status: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_ticket(cls, ticket) -> "UserTicketResponse":
        event = ticket.event
        venue = event.venue
        return cls(
            ticket_id=ticket.ticket_id,
            event_id=event.event_id,
            event_name=event.event_name,
            description=event.description,
            type=event.type,
            start_time=event.start_time,
            end_time=event.end_time,
            venue_name=venue.name if venue else "",
            venue_address=venue.address if venue else "",
            ticket_quantity=ticket.quantity,
            ticket_type=ticket.ticket_type,
            total_price=ticket.total_price,
            status=ticket.status,
            created_at=ticket.created_at,
        )


class PaymentResponse(CamelModel):
    payment_id: int
    ticket_id: int
    user_id: int
    amount: float
    status: str
    payment_method: str
    created_at: Optional[datetime] = None
