from sqlalchemy import func
from sqlalchemy.orm import Session
from ..models.enums import ApprovalStatus
from ..models.event import Event
from ..models.organizer import Organizer
from ..models.organizer_request import OrganizerRequest
from ..models.ticket import Ticket
from ..models.user import User
from ..models.user_request import UserRequest
from ..models.venue import Venue
from ..models.venue_request import VenueRequest
from ..schemas.dashboard import AdminDashboard, PendingQueues
from ..utils.service_helpers import round_currency


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def get_admin_dashboard(self) -> AdminDashboard:
        """Headline counts across every collection plus the review backlog"""
        pending = ApprovalStatus.PENDING.value

        tickets_sold, revenue = (
            self.db.query(
                func.coalesce(func.sum(Ticket.quantity), 0),
                func.coalesce(func.sum(Ticket.total_price), 0.0),
            )
            .filter(Ticket.deleted == False)
            .one()
        )

        by_status = dict(
            self.db.query(Event.approval_status, func.count(Event.event_id))
            .filter(Event.deleted == False)
            .group_by(Event.approval_status)
            .all()
        )

        return AdminDashboard(
            total_users=self._count(User),
            total_organizers=self._count(Organizer),
            total_events=self._count(Event),
            total_venues=self._count(Venue),
            total_tickets_sold=int(tickets_sold),
            total_revenue=round_currency(revenue),
            pending=PendingQueues(
                organizer_requests=self.db.query(OrganizerRequest)
                .filter(OrganizerRequest.status == pending)
                .count(),
                user_requests=self.db.query(UserRequest)
                .filter(UserRequest.status == pending)
                .count(),
                venue_requests=self.db.query(VenueRequest)
                .filter(VenueRequest.status == pending, VenueRequest.deleted == False)
                .count(),
                events=by_status.get(pending, 0),
            ),
            events_by_approval_status=by_status,
        )

    def _count(self, model) -> int:
        return self.db.query(model).filter(model.deleted == False).count()
