from pydantic import Field
from typing import Dict
from .common import CamelModel


class PendingQueues(CamelModel):
    organizer_requests: int = 0
    user_requests: int = 0
    venue_requests: int = 0
    events: int = 0


class AdminDashboard(CamelModel):
    total_users: int = 0
    total_organizers: int = 0
    total_events: int = 0
    total_venues: int = 0
    total_tickets_sold: int = 0
    total_revenue: float = 0.0
    pending: PendingQueues = Field(default_factory=PendingQueues)
    events_by_approval_status: Dict[str, int] = Field(default_factory=dict)
