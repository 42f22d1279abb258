from dataclasses import dataclass
from itertools import permutations
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Type
import logging
from sqlalchemy.orm import Session
from ..errors import ConflictError, DuplicateError
from ..models.enums import ApprovableKind, ApprovalStatus, ReviewAction, VenueAvailability
from ..models.event import Event
from ..models.organizer import Organizer
from ..models.organizer_request import OrganizerRequest
from ..models.user import User
from ..models.user_request import UserRequest
from ..models.venue import Venue
from ..models.venue_request import VenueRequest
from ..utils.constants import ResponseMessages
from ..utils.service_helpers import ServiceHelpers, write_transaction
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)

PENDING = ApprovalStatus.PENDING.value
APPROVED = ApprovalStatus.APPROVED.value
REJECTED = ApprovalStatus.REJECTED.value

Transition = Tuple[str, str]


@dataclass(frozen=True)
class ApprovalWorkflow:
    """Where an approvable record keeps its status and which moves are legal"""

    kind: ApprovableKind
    model: Type[Any]
    label: str
    status_field: str
    reason_field: str
    transitions: FrozenSet[Transition]
    # Approval keeps an optional admin comment instead of clearing the field
    comment_on_approval: bool = False
    is_request_queue: bool = False

    def status_of(self, record) -> str:
        return getattr(record, self.status_field)

    def check(self, current: str, new: str) -> None:
        if self.is_request_queue and current != PENDING:
            raise ConflictError(f"{self.label} is not pending")

        if current == new:
            raise ConflictError(f"{self.label} is already {new.lower()}")

        if (current, new) not in self.transitions:
            raise ConflictError(
                f"Cannot change {self.label.lower()} status from {current} to {new}"
            )


REQUEST_TRANSITIONS = frozenset({(PENDING, APPROVED), (PENDING, REJECTED)})
EVENT_TRANSITIONS = frozenset(
    {
        (PENDING, APPROVED),
        (PENDING, REJECTED),
        (REJECTED, APPROVED),
        (APPROVED, REJECTED),
    }
)
ORGANIZER_TRANSITIONS = frozenset({(APPROVED, REJECTED), (REJECTED, APPROVED)})
USER_TRANSITIONS = frozenset(permutations([PENDING, APPROVED, REJECTED], 2))


WORKFLOWS: Dict[ApprovableKind, ApprovalWorkflow] = {
    ApprovableKind.ORGANIZER_REQUEST: ApprovalWorkflow(
        kind=ApprovableKind.ORGANIZER_REQUEST,
        model=OrganizerRequest,
        label="Request",
        status_field="status",
        reason_field="rejection_reason",
        transitions=REQUEST_TRANSITIONS,
        is_request_queue=True,
    ),
    ApprovableKind.USER_REQUEST: ApprovalWorkflow(
        kind=ApprovableKind.USER_REQUEST,
        model=UserRequest,
        label="Request",
        status_field="status",
        reason_field="rejection_reason",
        transitions=REQUEST_TRANSITIONS,
        is_request_queue=True,
    ),
    ApprovableKind.VENUE_REQUEST: ApprovalWorkflow(
        kind=ApprovableKind.VENUE_REQUEST,
        model=VenueRequest,
        label="Request",
        status_field="status",
        reason_field="admin_comment",
        transitions=REQUEST_TRANSITIONS,
        comment_on_approval=True,
        is_request_queue=True,
    ),
    ApprovableKind.EVENT: ApprovalWorkflow(
        kind=ApprovableKind.EVENT,
        model=Event,
        label="Event",
        status_field="approval_status",
        reason_field="admin_comment",
        transitions=EVENT_TRANSITIONS,
        comment_on_approval=True,
    ),
    ApprovableKind.ORGANIZER: ApprovalWorkflow(
        kind=ApprovableKind.ORGANIZER,
        model=Organizer,
        label="Organizer",
        status_field="status",
        reason_field="rejection_reason",
        transitions=ORGANIZER_TRANSITIONS,
    ),
    ApprovableKind.USER: ApprovalWorkflow(
        kind=ApprovableKind.USER,
        model=User,
        label="User",
        status_field="approval_status",
        reason_field="rejection_reason",
        transitions=USER_TRANSITIONS,
    ),
}


class ApprovalService:
    """
    Single entry point for every approve/reject decision.

    Request queues are promoted on approval: the new Organizer, User or
    Venue and the request's status change are committed together, and the
    Pending-only guard means a second approval of the same request fails
    instead of creating a duplicate.
    """

    def __init__(self, db: Session):
        self.db = db

    def set_status(
        self,
        kind: ApprovableKind,
        record_id: int,
        new_status: ApprovalStatus,
        reason: Optional[str] = None,
    ):
        """Move a record to `new_status`; returns the record (or the promoted entity)"""
        new_status = ApprovalStatus(new_status)

        if new_status == ApprovalStatus.APPROVED:
            if kind == ApprovableKind.ORGANIZER_REQUEST:
                return self.promote_organizer_request(record_id)
            if kind == ApprovableKind.USER_REQUEST:
                return self.promote_user_request(record_id)
            if kind == ApprovableKind.VENUE_REQUEST:
                return self.review_venue_request(record_id, ReviewAction.APPROVE, reason)

        workflow = WORKFLOWS[kind]
        with write_transaction(self.db):
            record = ServiceHelpers.get_or_raise(
                self.db, workflow.model, record_id, workflow.label
            )
            self._apply(workflow, record, new_status.value, reason)

        return record

    def approve(self, kind: ApprovableKind, record_id: int, comment: Optional[str] = None):
        return self.set_status(kind, record_id, ApprovalStatus.APPROVED, comment)

    def reject(self, kind: ApprovableKind, record_id: int, reason: Optional[str]):
        return self.set_status(kind, record_id, ApprovalStatus.REJECTED, reason)

    def list_by_status(
        self, kind: ApprovableKind, status: Optional[ApprovalStatus] = None
    ) -> List[Any]:
        """Exact status match, soft-deleted records excluded"""
        workflow = WORKFLOWS[kind]
        model = workflow.model
        query = self.db.query(model)
        if hasattr(model, "deleted"):
            query = query.filter(model.deleted == False)
        if status is not None:
            query = query.filter(
                getattr(model, workflow.status_field) == ApprovalStatus(status).value
            )
        pk = ServiceHelpers.primary_key(model)
        return query.order_by(pk).all()

    # Promotion

    def promote_organizer_request(self, request_id: int) -> Organizer:
        workflow = WORKFLOWS[ApprovableKind.ORGANIZER_REQUEST]

        with write_transaction(self.db):
            request = ServiceHelpers.get_or_raise(
                self.db, OrganizerRequest, request_id, "Request"
            )
            workflow.check(request.status, APPROVED)

            if Organizer.find_by_email(self.db, request.email):
                raise DuplicateError(ResponseMessages.EMAIL_ALREADY_REGISTERED)

            organizer = Organizer(
                organizer_id=ServiceHelpers.next_id(self.db, Organizer),
                organizer_type=request.organizer_type,
                organizer_name=request.organizer_name,
                email=request.email,
                password=request.password,
                phone=request.phone,
                address=request.address,
                status=APPROVED,
            )
            self.db.add(organizer)

            self._apply(workflow, request, APPROVED, None)
            request.organizer_id = organizer.organizer_id

        logger.info(
            f"Organizer request {request_id} promoted to organizer "
            f"{organizer.organizer_id}"
        )
        return organizer

    def promote_user_request(self, request_id: int) -> User:
        workflow = WORKFLOWS[ApprovableKind.USER_REQUEST]

        with write_transaction(self.db):
            request = ServiceHelpers.get_or_raise(self.db, UserRequest, request_id, "Request")
            workflow.check(request.status, APPROVED)

            if User.find_by_email(self.db, request.email):
                raise DuplicateError(ResponseMessages.EMAIL_ALREADY_REGISTERED)

            user = User(
                user_id=ServiceHelpers.next_id(self.db, User),
                name=request.name,
                email=request.email,
                password=request.password,
                phone=request.phone,
                gender=request.gender,
                dob=request.dob,
                profile_picture=request.profile_picture or "",
                approval_status=APPROVED,
            )
            self.db.add(user)

            self._apply(workflow, request, APPROVED, None)
            request.user_id = user.user_id

        logger.info(f"User request {request_id} promoted to user {user.user_id}")
        return user

    def review_venue_request(
        self, request_id: int, action: ReviewAction, comment: Optional[str] = None
    ) -> VenueRequest:
        """Approve (creating the venue) or reject a venue request"""
        workflow = WORKFLOWS[ApprovableKind.VENUE_REQUEST]
        action = ReviewAction(action)

        with write_transaction(self.db):
            request = ServiceHelpers.get_or_raise(
                self.db, VenueRequest, request_id, "Request"
            )

            if action == ReviewAction.REJECT:
                self._apply(workflow, request, REJECTED, comment)
                return request

            workflow.check(request.status, APPROVED)
            venue = Venue(
                venue_id=ServiceHelpers.next_id(self.db, Venue),
                name=request.name,
                address=request.address,
                capacity=request.capacity,
                latitude=request.latitude,
                longitude=request.longitude,
                availability_status=VenueAvailability.AVAILABLE.value,
            )
            self.db.add(venue)

            self._apply(workflow, request, APPROVED, comment)
            request.venue_id = venue.venue_id

        logger.info(f"Venue request {request_id} promoted to venue {venue.venue_id}")
        return request

    # Private helpers

    def _apply(
        self, workflow: ApprovalWorkflow, record, new_status: str, text: Optional[str]
    ) -> None:
        current = workflow.status_of(record)
        workflow.check(current, new_status)

        if new_status == REJECTED:
            setattr(record, workflow.reason_field, ValidationHelpers.require_rejection_reason(text))
        elif workflow.comment_on_approval:
            cleaned = (text or "").strip()
            setattr(record, workflow.reason_field, cleaned or None)
        else:
            setattr(record, workflow.reason_field, None)

        setattr(record, workflow.status_field, new_status)

        pk = ServiceHelpers.primary_key(workflow.model)
        logger.info(
            f"{workflow.kind.value} {getattr(record, pk.key)}: "
            f"{current} -> {new_status}"
        )
