import pytest

from eventhub.errors import ConflictError, DuplicateError, NotFoundError, ValidationError
from eventhub.models.enums import (
    ApprovableKind,
    ApprovalStatus,
    ReviewAction,
    VenueAvailability,
)
from eventhub.models.organizer import Organizer
from eventhub.models.organizer_request import OrganizerRequest
from eventhub.models.user import User
from eventhub.models.venue import Venue
from eventhub.models.venue_request import VenueRequest
from eventhub.schemas.organizer import OrganizerRequestCreate
from eventhub.schemas.requests import VenueRequestCreate
from eventhub.schemas.user import UserRequestCreate
from eventhub.services.approval_service import WORKFLOWS, ApprovalService
from eventhub.services.request_service import RequestService

REASON = "Incomplete documentation provided"


def submit_organizer_request(db, email="a@b.com"):
    return RequestService(db).submit_organizer_request(
        OrganizerRequestCreate(
            organizer_type="Company",
            organizer_name="Bright Lights Ltd",
            email=email,
            phone="5550001111",
            address="22 Harbour Lane",
            password="secret123",
        )
    )


def submit_user_request(db, email="newcomer@example.com"):
    return RequestService(db).submit_user_request(
        UserRequestCreate(
            name="New Comer",
            email=email,
            phone="5550002222",
            gender="Female",
            dob="1999-09-09",
            password="secret123",
        )
    )


def submit_venue_request(db, organizer):
    return RequestService(db).submit_venue_request(
        organizer.organizer_id,
        VenueRequestCreate(
            name="Warehouse 9",
            address="9 Dock Street",
            capacity=250,
            latitude=51.5,
            longitude=-0.12,
            reason="Need a larger space for our festival",
        ),
    )


class TestOrganizerRequestPromotion:
    def test_approval_creates_organizer_and_keeps_request(self, db):
        request = submit_organizer_request(db)

        organizer = ApprovalService(db).promote_organizer_request(request.request_id)

        assert organizer.organizer_id is not None
        assert organizer.status == ApprovalStatus.APPROVED.value
        assert organizer.email == "a@b.com"
        assert organizer.organizer_name == "Bright Lights Ltd"
        # The hash is carried over, never re-hashed
        assert organizer.password == request.password

        stored = db.get(OrganizerRequest, request.request_id)
        assert stored.status == ApprovalStatus.APPROVED.value
        assert stored.organizer_id == organizer.organizer_id

    def test_second_approval_is_conflict_and_creates_nothing(self, db):
        request = submit_organizer_request(db)
        service = ApprovalService(db)
        service.promote_organizer_request(request.request_id)

        with pytest.raises(ConflictError):
            service.promote_organizer_request(request.request_id)

        assert db.query(Organizer).count() == 1

    def test_missing_request(self, db):
        with pytest.raises(NotFoundError):
            ApprovalService(db).promote_organizer_request(404)

    def test_rejected_request_cannot_be_promoted(self, db):
        request = submit_organizer_request(db)
        service = ApprovalService(db)
        service.reject(ApprovableKind.ORGANIZER_REQUEST, request.request_id, REASON)

        with pytest.raises(ConflictError):
            service.promote_organizer_request(request.request_id)

        assert db.query(Organizer).count() == 0

    def test_existing_organizer_email_blocks_promotion(self, db, make_organizer):
        request = submit_organizer_request(db, email="taken@example.com")
        make_organizer(email="taken@example.com")

        with pytest.raises(DuplicateError):
            ApprovalService(db).promote_organizer_request(request.request_id)

        # Rolled back as a unit: request still pending
        assert db.get(OrganizerRequest, request.request_id).status == "Pending"

    def test_set_status_approved_routes_to_promotion(self, db):
        request = submit_organizer_request(db)

        result = ApprovalService(db).set_status(
            ApprovableKind.ORGANIZER_REQUEST, request.request_id, ApprovalStatus.APPROVED
        )

        assert isinstance(result, Organizer)


class TestUserRequestPromotion:
    def test_approval_creates_approved_user(self, db):
        request = submit_user_request(db)

        user = ApprovalService(db).promote_user_request(request.request_id)

        assert user.approval_status == ApprovalStatus.APPROVED.value
        assert user.role == "user"
        assert user.email == "newcomer@example.com"
        assert db.get(type(request), request.request_id).user_id == user.user_id

    def test_promotion_happens_once(self, db):
        request = submit_user_request(db)
        service = ApprovalService(db)
        service.promote_user_request(request.request_id)

        with pytest.raises(ConflictError):
            service.promote_user_request(request.request_id)

        assert db.query(User).filter(User.email == "newcomer@example.com").count() == 1


class TestVenueRequestReview:
    def test_approve_creates_available_venue(self, db, organizer):
        request = submit_venue_request(db, organizer)

        reviewed = ApprovalService(db).review_venue_request(
            request.request_id, ReviewAction.APPROVE, "Looks good"
        )

        assert reviewed.status == ApprovalStatus.APPROVED.value
        assert reviewed.admin_comment == "Looks good"
        venue = db.get(Venue, reviewed.venue_id)
        assert venue.name == "Warehouse 9"
        assert venue.capacity == 250
        assert venue.latitude == 51.5
        assert venue.availability_status == VenueAvailability.AVAILABLE.value

    def test_reject_creates_no_venue(self, db, organizer):
        request = submit_venue_request(db, organizer)

        reviewed = ApprovalService(db).review_venue_request(
            request.request_id, ReviewAction.REJECT, "Location is not accessible"
        )

        assert reviewed.status == ApprovalStatus.REJECTED.value
        assert reviewed.admin_comment == "Location is not accessible"
        assert reviewed.venue_id is None
        assert db.query(Venue).count() == 0

    def test_reject_requires_comment(self, db, organizer):
        request = submit_venue_request(db, organizer)

        with pytest.raises(ValidationError):
            ApprovalService(db).review_venue_request(request.request_id, ReviewAction.REJECT)

        assert db.get(VenueRequest, request.request_id).status == "Pending"

    def test_reviewed_request_cannot_be_reviewed_again(self, db, organizer):
        request = submit_venue_request(db, organizer)
        service = ApprovalService(db)
        service.review_venue_request(request.request_id, ReviewAction.APPROVE)

        with pytest.raises(ConflictError):
            service.review_venue_request(request.request_id, ReviewAction.APPROVE)
        with pytest.raises(ConflictError):
            service.review_venue_request(request.request_id, ReviewAction.REJECT, REASON)

        assert db.query(Venue).count() == 1


class TestRejectionReason:
    @pytest.mark.parametrize("reason", [None, "", "   ", "too short"])
    def test_missing_or_short_reason_is_rejected(self, db, reason):
        request = submit_organizer_request(db)

        with pytest.raises(ValidationError):
            ApprovalService(db).reject(
                ApprovableKind.ORGANIZER_REQUEST, request.request_id, reason
            )

        assert db.get(OrganizerRequest, request.request_id).status == "Pending"

    def test_reason_is_stored_stripped(self, db):
        request = submit_organizer_request(db)

        rejected = ApprovalService(db).reject(
            ApprovableKind.ORGANIZER_REQUEST, request.request_id, f"  {REASON}  "
        )

        assert rejected.status == ApprovalStatus.REJECTED.value
        assert rejected.rejection_reason == REASON

    def test_approval_clears_previous_reason(self, db, organizer):
        service = ApprovalService(db)
        service.reject(ApprovableKind.ORGANIZER, organizer.organizer_id, REASON)
        assert organizer.rejection_reason == REASON

        approved = service.approve(
            ApprovableKind.ORGANIZER, organizer.organizer_id, "ignored comment"
        )

        assert approved.status == ApprovalStatus.APPROVED.value
        assert approved.rejection_reason is None

    def test_event_approval_keeps_admin_comment(self, db, make_event, organizer, venue):
        event = make_event(organizer, venue, approval_status="Pending")

        approved = ApprovalService(db).approve(
            ApprovableKind.EVENT, event.event_id, "Great lineup"
        )

        assert approved.approval_status == ApprovalStatus.APPROVED.value
        assert approved.admin_comment == "Great lineup"


class TestTransitionTable:
    def test_reapproving_is_conflict(self, db, make_event, organizer, venue):
        event = make_event(organizer, venue, approval_status="Approved")

        with pytest.raises(ConflictError):
            ApprovalService(db).approve(ApprovableKind.EVENT, event.event_id)

    def test_rereject_is_conflict(self, db, organizer):
        service = ApprovalService(db)
        service.reject(ApprovableKind.ORGANIZER, organizer.organizer_id, REASON)

        with pytest.raises(ConflictError):
            service.reject(ApprovableKind.ORGANIZER, organizer.organizer_id, REASON)

    def test_event_rejection_can_be_reversed(self, db, make_event, organizer, venue):
        event = make_event(organizer, venue, approval_status="Pending")
        service = ApprovalService(db)
        service.reject(ApprovableKind.EVENT, event.event_id, REASON)

        approved = service.approve(ApprovableKind.EVENT, event.event_id)

        assert approved.approval_status == ApprovalStatus.APPROVED.value

    def test_admin_can_override_user_status(self, db, user):
        service = ApprovalService(db)

        service.set_status(ApprovableKind.USER, user.user_id, ApprovalStatus.PENDING)
        assert user.approval_status == "Pending"

        service.reject(ApprovableKind.USER, user.user_id, REASON)
        assert user.approval_status == "Rejected"
        assert user.rejection_reason == REASON

        service.approve(ApprovableKind.USER, user.user_id)
        assert user.approval_status == "Approved"
        assert user.rejection_reason is None

    def test_request_queues_only_leave_pending(self):
        for kind in (
            ApprovableKind.ORGANIZER_REQUEST,
            ApprovableKind.USER_REQUEST,
            ApprovableKind.VENUE_REQUEST,
        ):
            workflow = WORKFLOWS[kind]
            assert workflow.transitions == {
                ("Pending", "Approved"),
                ("Pending", "Rejected"),
            }
            with pytest.raises(ConflictError):
                workflow.check("Approved", "Rejected")

    def test_deleted_event_is_not_found(self, db, make_event, organizer, venue):
        event = make_event(organizer, venue, approval_status="Pending", deleted=True)

        with pytest.raises(NotFoundError):
            ApprovalService(db).approve(ApprovableKind.EVENT, event.event_id)


class TestListing:
    def test_exact_status_match(self, db):
        first = submit_organizer_request(db, email="first@example.com")
        second = submit_organizer_request(db, email="second@example.com")
        service = ApprovalService(db)
        service.reject(ApprovableKind.ORGANIZER_REQUEST, second.request_id, REASON)

        pending = service.list_by_status(
            ApprovableKind.ORGANIZER_REQUEST, ApprovalStatus.PENDING
        )
        rejected = service.list_by_status(
            ApprovableKind.ORGANIZER_REQUEST, ApprovalStatus.REJECTED
        )

        assert [r.request_id for r in pending] == [first.request_id]
        assert [r.request_id for r in rejected] == [second.request_id]

    def test_soft_deleted_excluded(self, db, organizer):
        kept = submit_venue_request(db, organizer)
        hidden = submit_venue_request(db, organizer)
        hidden.deleted = True
        db.commit()

        pending = ApprovalService(db).list_by_status(
            ApprovableKind.VENUE_REQUEST, ApprovalStatus.PENDING
        )

        assert [r.request_id for r in pending] == [kept.request_id]
