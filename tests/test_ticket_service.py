from unittest.mock import MagicMock

import pytest

from eventhub.errors import (
    ConflictError,
    NotFoundError,
    PaymentFailedError,
    PermissionDeniedError,
    ValidationError,
)
from eventhub.models.payment import Payment
from eventhub.models.ticket import Ticket
from eventhub.schemas.feedback import FeedbackCreate
from eventhub.services.ticket_service import TicketService
from eventhub.utils.bank_gateway import BankTransferResult


class TestRegistration:
    def test_per_user_caps(self, db, user, event):
        """10 provided, 4 per user: 5 fails, 4 succeeds, 1 more fails"""
        service = TicketService(db)

        with pytest.raises(ValidationError, match="Maximum 4 tickets per user"):
            service.register_for_event(user.user_id, event.event_id, 5)

        ticket = service.register_for_event(user.user_id, event.event_id, 4)
        assert ticket.total_price == 4 * 25.0
        assert ticket.status == "Confirmed"
        assert ticket.ticket_type == "Standard"

        with pytest.raises(
            ValidationError, match="You can only purchase 4 tickets for this event"
        ):
            service.register_for_event(user.user_id, event.event_id, 1)

        assert db.query(Ticket).count() == 1

    def test_inventory_checked_before_per_user_cap(
        self, db, make_user, make_event, organizer, venue
    ):
        event = make_event(organizer, venue, tickets_provided=5, max_tickets_per_user=4)
        first = make_user(email="first@example.com")
        second = make_user(email="second@example.com")
        service = TicketService(db)
        service.register_for_event(first.user_id, event.event_id, 4)

        with pytest.raises(ValidationError, match="Only 1 tickets available"):
            service.register_for_event(second.user_id, event.event_id, 2)

    def test_capacity_is_conserved(self, db, make_user, make_event, organizer, venue):
        event = make_event(organizer, venue, tickets_provided=6, max_tickets_per_user=2)
        service = TicketService(db)
        buyers = [make_user(email=f"buyer{i}@example.com") for i in range(4)]

        outcomes = []
        for buyer in buyers:
            try:
                service.register_for_event(buyer.user_id, event.event_id, 2)
                outcomes.append(True)
            except ValidationError:
                outcomes.append(False)

        assert outcomes == [True, True, True, False]
        sold = sum(t.quantity for t in db.query(Ticket).filter(Ticket.deleted == False))
        assert sold == 6

    def test_deleted_tickets_do_not_count(self, db, user, make_event, organizer, venue):
        event = make_event(organizer, venue, tickets_provided=4, max_tickets_per_user=4)
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 4)
        ticket.deleted = True
        db.commit()

        again = service.register_for_event(user.user_id, event.event_id, 4)

        assert again.ticket_id > ticket.ticket_id

    @pytest.mark.parametrize(
        "fields",
        [
            {"approval_status": "Pending"},
            {"approval_status": "Rejected"},
            {"status": "Cancelled"},
        ],
    )
    def test_event_must_be_open(self, db, user, make_event, organizer, venue, fields):
        event = make_event(organizer, venue, **fields)

        with pytest.raises(ValidationError, match="not available for registration"):
            TicketService(db).register_for_event(user.user_id, event.event_id, 1)

    def test_missing_or_deleted_event(self, db, user, make_event, organizer, venue):
        deleted = make_event(organizer, venue, deleted=True)
        service = TicketService(db)

        with pytest.raises(NotFoundError):
            service.register_for_event(user.user_id, 999, 1)
        with pytest.raises(NotFoundError):
            service.register_for_event(user.user_id, deleted.event_id, 1)

    def test_non_positive_quantity(self, db, user, event):
        with pytest.raises(ValidationError):
            TicketService(db).register_for_event(user.user_id, event.event_id, 0)

    def test_missing_event_reported_before_quantity(self, db, user):
        with pytest.raises(NotFoundError):
            TicketService(db).register_for_event(user.user_id, 999, 0)

    def test_total_price_rounded_to_cents(self, db, user, make_event, organizer, venue):
        event = make_event(organizer, venue, ticket_price=19.99)

        ticket = TicketService(db).register_for_event(user.user_id, event.event_id, 3)

        assert ticket.total_price == 59.97


class TestTransfer:
    def test_transfer_to_another_user(self, db, user, make_user, event):
        recipient = make_user(email="friend@example.com")
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 2)

        moved = service.transfer_ticket(
            user.user_id, ticket.ticket_id, "Friend@example.com", "Cannot attend"
        )

        assert moved.user_id == recipient.user_id
        assert moved.transferred_at is not None
        assert moved.transfer_reason == "Cannot attend"

    def test_not_owned_ticket_is_not_found_and_unchanged(
        self, db, user, make_user, event
    ):
        owner = make_user(email="owner@example.com")
        service = TicketService(db)
        ticket = service.register_for_event(owner.user_id, event.event_id, 1)

        with pytest.raises(NotFoundError):
            service.transfer_ticket(user.user_id, ticket.ticket_id, "user@example.com")

        stored = db.get(Ticket, ticket.ticket_id)
        assert stored.user_id == owner.user_id
        assert stored.transferred_at is None

    def test_unknown_recipient(self, db, user, event):
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 1)

        with pytest.raises(NotFoundError, match="Recipient not found"):
            service.transfer_ticket(user.user_id, ticket.ticket_id, "ghost@example.com")

        assert db.get(Ticket, ticket.ticket_id).user_id == user.user_id

    def test_recipient_cap_is_enforced(self, db, user, make_user, event):
        recipient = make_user(email="friend@example.com")
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 4)
        service.register_for_event(recipient.user_id, event.event_id, 4)

        with pytest.raises(ValidationError, match="Recipient can only hold 4 tickets"):
            service.transfer_ticket(user.user_id, ticket.ticket_id, "friend@example.com")

        stored = db.get(Ticket, ticket.ticket_id)
        assert stored.user_id == user.user_id
        assert stored.transferred_at is None

    def test_transfer_up_to_recipient_cap(self, db, user, make_user, event):
        recipient = make_user(email="friend@example.com")
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 3)
        service.register_for_event(recipient.user_id, event.event_id, 1)

        moved = service.transfer_ticket(
            user.user_id, ticket.ticket_id, "friend@example.com"
        )

        assert moved.user_id == recipient.user_id


class TestPayments:
    def test_simulated_payment_marks_ticket_paid(self, db, user, event):
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 2)

        payment = service.simulate_payment(user.user_id, ticket.ticket_id)

        assert payment.status == "Completed"
        assert payment.payment_method == "Bank Transfer"
        assert payment.amount == 50.0
        assert db.get(Ticket, ticket.ticket_id).status == "Paid"

    def test_paying_twice_is_conflict(self, db, user, event):
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 1)
        service.simulate_payment(user.user_id, ticket.ticket_id)

        with pytest.raises(ConflictError):
            service.simulate_payment(user.user_id, ticket.ticket_id)

        assert db.query(Payment).count() == 1

    def test_missing_ticket(self, db, user):
        with pytest.raises(NotFoundError):
            TicketService(db).simulate_payment(user.user_id, 42)

    def test_bank_payment_success(self, db, user, event):
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 1)
        gateway = MagicMock()
        gateway.transfer.return_value = BankTransferResult(
            success=True, message="Transaction Successful"
        )

        payment, message = service.pay_by_bank(
            user.user_id, ticket.ticket_id, "998877", gateway
        )

        gateway.transfer.assert_called_once_with("998877", 25.0)
        assert message == "Transaction Successful"
        assert payment.amount == 25.0
        assert db.get(Ticket, ticket.ticket_id).status == "Paid"

    def test_bank_payment_failure_surfaces_message(self, db, user, event):
        service = TicketService(db)
        ticket = service.register_for_event(user.user_id, event.event_id, 1)
        gateway = MagicMock()
        gateway.transfer.return_value = BankTransferResult(
            success=False, message="Insufficient balance"
        )

        with pytest.raises(PaymentFailedError, match="Insufficient balance"):
            service.pay_by_bank(user.user_id, ticket.ticket_id, "998877", gateway)

        assert db.query(Payment).count() == 0
        assert db.get(Ticket, ticket.ticket_id).status == "Confirmed"


class TestFeedback:
    def test_ticket_holder_can_leave_feedback(self, db, user, event):
        service = TicketService(db)
        service.register_for_event(user.user_id, event.event_id, 1)

        feedback = service.add_feedback(
            user.user_id, event.event_id, FeedbackCreate(comments="  Loved it  ")
        )

        assert feedback.comments == "Loved it"
        assert feedback.event_id == event.event_id

    def test_non_holder_cannot(self, db, user, event):
        with pytest.raises(PermissionDeniedError):
            TicketService(db).add_feedback(
                user.user_id, event.event_id, FeedbackCreate(comments="Never went")
            )


class TestListings:
    def test_tickets_and_registered_events(self, db, user, event, venue):
        service = TicketService(db)
        service.register_for_event(user.user_id, event.event_id, 2)

        tickets = service.get_user_tickets(user.user_id)
        registered = service.get_registered_events(user.user_id)

        assert len(tickets) == 1
        assert tickets[0].event_name == "Summer Concert"
        assert tickets[0].venue_name == venue.name
        assert tickets[0].ticket_quantity == 2
        assert registered[0].event_id == event.event_id
        assert registered[0].ticket_quantity == 2
