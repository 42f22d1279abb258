from typing import Dict, List, Optional
import logging
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models.enums import ApprovalStatus, EventStatus
from ..models.event import Event
from ..models.feedback import Feedback
from ..models.ticket import Ticket
from ..models.venue import Venue
from ..schemas.event import (
    AdminEventUpdate,
    EventCreate,
    EventDetailResponse,
    EventFilterParams,
    EventUpdate,
)
from ..utils.service_helpers import ServiceHelpers, write_transaction

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, db: Session):
        self.db = db

    # Public catalogue

    def get_public_events(
        self, filters: Optional[EventFilterParams] = None
    ) -> List[EventDetailResponse]:
        """Approved, active, non-deleted events with venue and organizer names"""
        query = self._with_details(self.db.query(Event)).filter(
            Event.deleted == False,
            Event.approval_status == ApprovalStatus.APPROVED.value,
            Event.status == EventStatus.ACTIVE.value,
        )

        if filters:
            query = self._apply_filters(query, filters)

        return self._enrich(query.order_by(Event.start_time, Event.event_id).all())

    def get_event_details(self, event_id: int) -> EventDetailResponse:
        event = ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")
        return EventDetailResponse.from_event(event, self.tickets_sold(event_id))

    def tickets_sold(self, event_id: int) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(Ticket.quantity), 0))
            .filter(Ticket.event_id == event_id, Ticket.deleted == False)
            .scalar()
        )
        return int(total)

    # Organizer operations

    def create_event(self, organizer_id: int, data: EventCreate) -> Event:
        with write_transaction(self.db):
            venue = ServiceHelpers.get_or_raise(self.db, Venue, data.venue_id, "Venue")
            self._check_capacity(data.tickets_provided, venue)

            event = Event(
                event_id=ServiceHelpers.next_id(self.db, Event),
                organizer_id=organizer_id,
                event_name=data.event_name,
                description=data.description,
                rules_and_restrictions=data.rules_and_restrictions,
                type=data.type.value,
                venue_id=venue.venue_id,
                tickets_provided=data.tickets_provided,
                max_tickets_per_user=data.max_tickets_per_user,
                ticket_price=data.ticket_price,
                start_time=data.start_time,
                end_time=data.end_time,
                status=EventStatus.ACTIVE.value,
                approval_status=ApprovalStatus.PENDING.value,
            )
            self.db.add(event)

        logger.info(f"Event {event.event_id} created by organizer {organizer_id}")
        return event

    def get_organizer_events(self, organizer_id: int) -> List[EventDetailResponse]:
        events = (
            self._with_details(self.db.query(Event))
            .filter(Event.organizer_id == organizer_id, Event.deleted == False)
            .order_by(Event.event_id)
            .all()
        )
        return self._enrich(events)

    def get_organizer_event(self, organizer_id: int, event_id: int) -> Event:
        event = ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")
        # Other organizers' events are reported as missing
        if event.organizer_id != organizer_id:
            raise NotFoundError("Event not found")
        return event

    def update_organizer_event(
        self, organizer_id: int, event_id: int, updates: EventUpdate
    ) -> Event:
        with write_transaction(self.db):
            event = self.get_organizer_event(organizer_id, event_id)

            if event.approval_status != ApprovalStatus.PENDING.value:
                raise ConflictError("Only pending events can be edited")

            self._apply_updates(event, updates)

        return event

    def get_event_feedback(self, organizer_id: int, event_id: int) -> List[Feedback]:
        self.get_organizer_event(organizer_id, event_id)
        return (
            self.db.query(Feedback)
            .options(joinedload(Feedback.user))
            .filter(Feedback.event_id == event_id, Feedback.deleted == False)
            .order_by(Feedback.feedback_id)
            .all()
        )

    # Admin operations

    def list_events(
        self,
        include_deleted: bool = False,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> List[EventDetailResponse]:
        query = ServiceHelpers.active(
            self._with_details(self.db.query(Event)), Event, include_deleted
        )
        if approval_status:
            query = query.filter(
                Event.approval_status == ApprovalStatus(approval_status).value
            )
        return self._enrich(query.order_by(Event.event_id).all())

    def admin_update_event(self, event_id: int, updates: AdminEventUpdate) -> Event:
        with write_transaction(self.db):
            event = ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")
            self._apply_updates(event, updates)

        logger.info(f"Event {event_id} updated by admin")
        return event

    def cancel_event(self, event_id: int) -> Event:
        with write_transaction(self.db):
            event = ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")

            if event.status == EventStatus.CANCELLED.value:
                raise ConflictError("Event is already cancelled")

            event.status = EventStatus.CANCELLED.value

        logger.info(f"Event {event_id} cancelled")
        return event

    def delete_event(self, event_id: int) -> Event:
        with write_transaction(self.db):
            event = ServiceHelpers.get_or_raise(self.db, Event, event_id, "Event")
            event.deleted = True

        logger.info(f"Event {event_id} deleted")
        return event

    # Private helpers

    def _with_details(self, query):
        return query.options(joinedload(Event.venue), joinedload(Event.organizer))

    def _enrich(self, events: List[Event]) -> List[EventDetailResponse]:
        sold = self._tickets_sold_by_event([e.event_id for e in events])
        return [EventDetailResponse.from_event(e, sold.get(e.event_id, 0)) for e in events]

    def _tickets_sold_by_event(self, event_ids: List[int]) -> Dict[int, int]:
        if not event_ids:
            return {}
        rows = (
            self.db.query(Ticket.event_id, func.sum(Ticket.quantity))
            .filter(Ticket.event_id.in_(event_ids), Ticket.deleted == False)
            .group_by(Ticket.event_id)
            .all()
        )
        return {event_id: int(total or 0) for event_id, total in rows}

    def _apply_filters(self, query, filters: EventFilterParams):
        if filters.type:
            query = query.filter(Event.type == filters.type)
        if filters.min_price is not None:
            query = query.filter(Event.ticket_price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Event.ticket_price <= filters.max_price)
        if filters.start_date:
            query = query.filter(Event.start_time >= filters.start_date)
        if filters.end_date:
            query = query.filter(Event.end_time <= filters.end_date)
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            query = query.filter(
                or_(Event.event_name.ilike(pattern), Event.description.ilike(pattern))
            )
        return query

    def _check_capacity(self, tickets_provided: int, venue: Venue) -> None:
        if tickets_provided > venue.capacity:
            raise ValidationError("Tickets provided cannot exceed venue capacity")

    def _apply_updates(self, event: Event, updates: EventUpdate) -> None:
        """Apply a partial update, re-checking capacity and the time window"""
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)

        venue = event.venue
        if "venue_id" in changes and changes["venue_id"] != event.venue_id:
            venue = ServiceHelpers.get_or_raise(
                self.db, Venue, changes["venue_id"], "Venue"
            )

        tickets_provided = changes.get("tickets_provided", event.tickets_provided)
        if "tickets_provided" in changes or "venue_id" in changes:
            self._check_capacity(tickets_provided, venue)

        if tickets_provided < self.tickets_sold(event.event_id):
            raise ValidationError(
                "Tickets provided cannot be less than tickets already sold"
            )

        start = changes.get("start_time", event.start_time)
        end = changes.get("end_time", event.end_time)
        if end <= start:
            raise ValidationError("End time must be after start time")

        for field, value in changes.items():
            if hasattr(value, "value"):
                value = value.value
            setattr(event, field, value)

        if "venue_id" in changes:
            event.venue = venue
