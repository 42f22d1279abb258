from typing import List, Optional, Tuple
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from ..errors import (
    ConflictError,
    NotFoundError,
    PaymentFailedError,
    PermissionDeniedError,
    ValidationError,
)
from ..models.enums import PaymentStatus, TicketStatus
from ..models.event import Event
from ..models.feedback import Feedback
from ..models.payment import Payment
from ..models.ticket import Ticket
from ..models.user import User
from ..schemas.event import RegisteredEventResponse
from ..schemas.feedback import FeedbackCreate
from ..schemas.ticket import UserTicketResponse
from ..utils.bank_gateway import BankGatewayClient
from ..utils.constants import AppConstants
from ..utils.service_helpers import ServiceHelpers, round_currency, utcnow, write_transaction

logger = logging.getLogger(__name__)


class TicketService:
    def __init__(self, db: Session):
        self.db = db

    def register_for_event(
        self,
        user_id: int,
        event_id: int,
        ticket_quantity: int,
        ticket_type: Optional[str] = None,
    ) -> Ticket:
        """
        Issue tickets after checking, in order: the event exists, it is open
        for registration, enough inventory remains, the per-call cap and the
        caller's cumulative cap for this event.
        """
        with write_transaction(self.db):
            event = ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")

            if ticket_quantity <= 0:
                raise ValidationError("Ticket quantity must be a positive number")

            if not event.is_open_for_registration:
                raise ValidationError("Event is not available for registration")

            total_sold = self._quantity_sum(Ticket.event_id == event_id)
            available = event.tickets_provided - total_sold
            if ticket_quantity > available:
                raise ValidationError(f"Only {available} tickets available")

            if ticket_quantity > event.max_tickets_per_user:
                raise ValidationError(
                    f"Maximum {event.max_tickets_per_user} tickets per user"
                )

            already_held = self._quantity_sum(
                Ticket.event_id == event_id, Ticket.user_id == user_id
            )
            if already_held + ticket_quantity > event.max_tickets_per_user:
                raise ValidationError(
                    f"You can only purchase {event.max_tickets_per_user} "
                    f"tickets for this event"
                )

            ticket = Ticket(
                ticket_id=ServiceHelpers.next_id(self.db, Ticket),
                user_id=user_id,
                event_id=event_id,
                quantity=ticket_quantity,
                ticket_type=ticket_type or AppConstants.DEFAULT_TICKET_TYPE,
                total_price=round_currency(event.ticket_price * ticket_quantity),
                status=TicketStatus.CONFIRMED.value,
            )
            self.db.add(ticket)

        logger.info(
            f"Ticket {ticket.ticket_id}: user {user_id} registered "
            f"{ticket_quantity} for event {event_id}"
        )
        return ticket

    def get_user_tickets(self, user_id: int) -> List[UserTicketResponse]:
        return [UserTicketResponse.from_ticket(t) for t in self._held_tickets(user_id)]

    def get_registered_events(self, user_id: int) -> List[RegisteredEventResponse]:
        return [
            RegisteredEventResponse.from_ticket(t) for t in self._held_tickets(user_id)
        ]

    def transfer_ticket(
        self,
        user_id: int,
        ticket_id: int,
        recipient_email: str,
        reason: Optional[str] = None,
    ) -> Ticket:
        with write_transaction(self.db):
            ticket = self._owned_ticket(user_id, ticket_id)

            recipient = User.find_by_email(self.db, recipient_email.lower())
            if not recipient:
                raise NotFoundError("Recipient not found")

            if recipient.user_id == user_id:
                raise ValidationError("Cannot transfer a ticket to yourself")

            recipient_held = self._quantity_sum(
                Ticket.event_id == ticket.event_id,
                Ticket.user_id == recipient.user_id,
            )
            limit = ticket.event.max_tickets_per_user
            if recipient_held + ticket.quantity > limit:
                raise ValidationError(
                    f"Recipient can only hold {limit} tickets for this event"
                )

            ticket.user_id = recipient.user_id
            ticket.transferred_at = utcnow()
            ticket.transfer_reason = (reason or "").strip()

        logger.info(
            f"Ticket {ticket_id} transferred from user {user_id} "
            f"to user {recipient.user_id}"
        )
        return ticket

    def simulate_payment(self, user_id: int, ticket_id: int) -> Payment:
        """Record a completed payment and mark the ticket Paid, atomically"""
        with write_transaction(self.db):
            ticket = self._payable_ticket(user_id, ticket_id)
            payment = self._record_payment(ticket)

        logger.info(f"Payment {payment.payment_id} completed for ticket {ticket_id}")
        return payment

    def pay_by_bank(
        self,
        user_id: int,
        ticket_id: int,
        from_account: str,
        gateway: BankGatewayClient,
    ) -> Tuple[Payment, str]:
        """
        Charge the ticket through the external bank. The call happens outside
        the write lock; the ticket is re-checked before the payment is stored.
        """
        ticket = self._payable_ticket(user_id, ticket_id)
        amount = ticket.total_price

        result = gateway.transfer(from_account, amount)
        if not result.success:
            raise PaymentFailedError(result.message)

        with write_transaction(self.db):
            ticket = self._payable_ticket(user_id, ticket_id)
            payment = self._record_payment(ticket)

        logger.info(
            f"Payment {payment.payment_id} completed for ticket {ticket_id} via bank"
        )
        return payment, result.message

    def add_feedback(self, user_id: int, event_id: int, data: FeedbackCreate) -> Feedback:
        with write_transaction(self.db):
            ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")

            holds_ticket = (
                self.db.query(Ticket)
                .filter(
                    Ticket.event_id == event_id,
                    Ticket.user_id == user_id,
                    Ticket.deleted == False,
                )
                .first()
            )
            if not holds_ticket:
                raise PermissionDeniedError(
                    "Only ticket holders can leave feedback for this event"
                )

            feedback = Feedback(
                feedback_id=ServiceHelpers.next_id(self.db, Feedback),
                event_id=event_id,
                user_id=user_id,
                comments=data.comments,
            )
            self.db.add(feedback)

        return feedback

    # Private helpers

    def _quantity_sum(self, *criteria) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(Ticket.quantity), 0))
            .filter(Ticket.deleted == False, *criteria)
            .scalar()
        )
        return int(total)

    def _held_tickets(self, user_id: int) -> List[Ticket]:
        return (
            self.db.query(Ticket)
            .options(joinedload(Ticket.event).joinedload(Event.venue))
            .filter(Ticket.user_id == user_id, Ticket.deleted == False)
            .order_by(Ticket.ticket_id)
            .all()
        )

    def _owned_ticket(self, user_id: int, ticket_id: int) -> Ticket:
        ticket = ServiceHelpers.get_or_raise(self.db, Ticket, ticket_id, "Ticket")
        # Someone else's ticket is indistinguishable from a missing one
        if ticket.user_id != user_id:
            raise NotFoundError("Ticket not found")
        return ticket

    def _payable_ticket(self, user_id: int, ticket_id: int) -> Ticket:
        ticket = self._owned_ticket(user_id, ticket_id)
        if ticket.status == TicketStatus.PAID.value:
            raise ConflictError("Ticket is already paid")
        return ticket

    def _record_payment(self, ticket: Ticket) -> Payment:
        payment = Payment(
            payment_id=ServiceHelpers.next_id(self.db, Payment),
            ticket_id=ticket.ticket_id,
            user_id=ticket.user_id,
            amount=ticket.total_price,
            status=PaymentStatus.COMPLETED.value,
            payment_method=AppConstants.DEFAULT_PAYMENT_METHOD,
        )
        self.db.add(payment)
        ticket.status = TicketStatus.PAID.value
        return payment
