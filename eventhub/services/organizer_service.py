from typing import List
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from ..models.event import Event
from ..models.organizer import Organizer
from ..models.ticket import Ticket
from ..schemas.event import BookingSummary
from ..schemas.organizer import OrganizerUpdate
from ..utils.security import get_password_hash
from ..utils.service_helpers import ServiceHelpers, round_currency, write_transaction

logger = logging.getLogger(__name__)


class OrganizerService:
    def __init__(self, db: Session):
        self.db = db

    def get_organizer(self, organizer_id: int) -> Organizer:
        return ServiceHelpers.get_or_raise(self.db, Organizer, organizer_id, "Organizer")

    def update_profile(self, organizer_id: int, updates: OrganizerUpdate) -> Organizer:
        with write_transaction(self.db):
            organizer = ServiceHelpers.get_or_raise(
                self.db, Organizer, organizer_id, "Organizer"
            )

            changes = updates.model_dump(exclude_unset=True, exclude_none=True)
            password = changes.pop("password", None)
            if "organizer_type" in changes:
                changes["organizer_type"] = updates.organizer_type.value
            for field, value in changes.items():
                setattr(organizer, field, value)

            if password:
                organizer.password = get_password_hash(password)

        return organizer

    def list_organizers(self, include_deleted: bool = False) -> List[Organizer]:
        query = ServiceHelpers.active(self.db.query(Organizer), Organizer, include_deleted)
        return query.order_by(Organizer.organizer_id).all()

    def delete_organizer(self, organizer_id: int) -> Organizer:
        with write_transaction(self.db):
            organizer = ServiceHelpers.get_or_raise(
                self.db, Organizer, organizer_id, "Organizer"
            )
            organizer.deleted = True

        logger.info(f"Organizer {organizer_id} deleted")
        return organizer

    def get_booking_summary(self, organizer_id: int) -> BookingSummary:
        """Ticket count and revenue over the organizer's non-deleted events"""
        total_tickets, total_revenue = (
            self.db.query(
                func.coalesce(func.sum(Ticket.quantity), 0),
                func.coalesce(func.sum(Ticket.total_price), 0.0),
            )
            .join(Event, Ticket.event_id == Event.event_id)
            .filter(
                Event.organizer_id == organizer_id,
                Event.deleted == False,
                Ticket.deleted == False,
            )
            .one()
        )

        return BookingSummary(
            total_active_tickets=int(total_tickets),
            total_revenue=round_currency(total_revenue),
        )
