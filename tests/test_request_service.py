import re

import pytest

from eventhub.errors import DuplicateError, NotFoundError, ValidationError
from eventhub.models.enums import ApprovableKind
from eventhub.schemas.requests import VenueRequestCreate
from eventhub.services.approval_service import ApprovalService
from eventhub.services.request_service import RequestService
from eventhub.utils.security import verify_password

from .test_approval_service import (
    REASON,
    submit_organizer_request,
    submit_user_request,
    submit_venue_request,
)

TOKEN_FORMAT = re.compile(r"^[a-f0-9]{32}$")


class TestSubmission:
    def test_organizer_request_starts_pending_with_token(self, db):
        request = submit_organizer_request(db)

        assert request.status == "Pending"
        assert TOKEN_FORMAT.match(request.tracking_token)
        assert verify_password("secret123", request.password)

    def test_second_pending_request_for_same_email_fails(self, db):
        submit_organizer_request(db, email="a@b.com")

        with pytest.raises(DuplicateError, match="You already have a pending request"):
            submit_organizer_request(db, email="a@b.com")

    def test_email_is_compared_case_insensitively(self, db):
        submit_organizer_request(db, email="Mixed@Example.com")

        with pytest.raises(DuplicateError):
            submit_organizer_request(db, email="mixed@example.com")

    def test_resubmission_allowed_after_rejection(self, db):
        first = submit_organizer_request(db)
        ApprovalService(db).reject(
            ApprovableKind.ORGANIZER_REQUEST, first.request_id, REASON
        )

        second = submit_organizer_request(db)

        assert second.request_id > first.request_id
        assert second.status == "Pending"

    def test_existing_organizer_email_fails(self, db, make_organizer):
        make_organizer(email="live@example.com")

        with pytest.raises(DuplicateError):
            submit_organizer_request(db, email="live@example.com")

    def test_user_request_duplicate_and_existing_user(self, db, make_user):
        submit_user_request(db, email="queued@example.com")
        make_user(email="member@example.com")

        with pytest.raises(DuplicateError):
            submit_user_request(db, email="queued@example.com")
        with pytest.raises(DuplicateError):
            submit_user_request(db, email="member@example.com")

    def test_tokens_are_unique(self, db, organizer):
        tokens = {
            submit_organizer_request(db, email=f"org{i}@example.com").tracking_token
            for i in range(3)
        }
        tokens.add(submit_venue_request(db, organizer).tracking_token)
        tokens.add(submit_user_request(db).tracking_token)

        assert len(tokens) == 5


class TestVenueRequestFormats:
    def test_legacy_format_gets_defaults(self, db, organizer):
        request = RequestService(db).submit_venue_request(
            organizer.organizer_id,
            VenueRequestCreate(location_name="Old Mill", reason="Cheaper than downtown"),
        )

        assert request.name == "Old Mill"
        assert request.address == "Old Mill"
        assert request.capacity == 100
        assert request.latitude == 0.0
        assert request.longitude == 0.0
        assert request.status == "Pending"

    def test_neither_format_is_invalid(self):
        with pytest.raises(ValueError):
            VenueRequestCreate(name="Half a request")

    def test_organizer_sees_only_own_requests(self, db, organizer, make_organizer):
        other = make_organizer(email="other@example.com")
        mine = submit_venue_request(db, organizer)
        submit_venue_request(db, other)

        requests = RequestService(db).get_organizer_venue_requests(organizer.organizer_id)

        assert [r.request_id for r in requests] == [mine.request_id]


class TestTracking:
    @pytest.mark.parametrize(
        "token",
        [
            "",
            "abc",
            "g" * 32,
            "a" * 31,
            "a" * 33,
            "a" * 32 + "\n",
            "0123456789abcdef0123456789abcde-",
        ],
    )
    def test_bad_format_fails_before_lookup(self, db, token):
        with pytest.raises(ValidationError, match="Invalid tracking token format"):
            RequestService(db).track_request(token)

    def test_unknown_token_is_not_found(self, db):
        with pytest.raises(NotFoundError):
            RequestService(db).track_request("0" * 32)

    def test_finds_each_queue(self, db, organizer):
        service = RequestService(db)
        organizer_request = submit_organizer_request(db)
        venue_request = submit_venue_request(db, organizer)
        user_request = submit_user_request(db)

        assert service.track_request(organizer_request.tracking_token) == (
            "organizer",
            organizer_request,
        )
        assert service.track_request(venue_request.tracking_token) == (
            "venue",
            venue_request,
        )
        assert service.track_request(user_request.tracking_token) == (
            "user",
            user_request,
        )

    def test_uppercase_token_is_accepted(self, db):
        request = submit_organizer_request(db)

        request_type, found = RequestService(db).track_request(
            request.tracking_token.upper()
        )

        assert request_type == "organizer"
        assert found.request_id == request.request_id
