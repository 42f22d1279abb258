from typing import List, Tuple, Union
import logging
from sqlalchemy.orm import Session
from ..errors import DuplicateError, NotFoundError
from ..models.enums import ApprovalStatus
from ..models.organizer import Organizer
from ..models.organizer_request import OrganizerRequest
from ..models.user import User
from ..models.user_request import UserRequest
from ..models.venue_request import VenueRequest
from ..schemas.organizer import OrganizerRequestCreate
from ..schemas.requests import VenueRequestCreate
from ..schemas.user import UserRequestCreate
from ..utils.constants import AppConstants, ResponseMessages
from ..utils.security import generate_tracking_token, get_password_hash
from ..utils.service_helpers import ServiceHelpers, write_transaction
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)

TrackedRequest = Union[OrganizerRequest, VenueRequest, UserRequest]


class RequestService:
    """Submission and tracking of the organizer, user and venue request queues"""

    def __init__(self, db: Session):
        self.db = db

    def submit_organizer_request(self, data: OrganizerRequestCreate) -> OrganizerRequest:
        email = data.email.lower()

        with write_transaction(self.db):
            if self._has_pending(OrganizerRequest, email):
                raise DuplicateError(ResponseMessages.PENDING_REQUEST_EXISTS)

            if Organizer.find_by_email(self.db, email):
                raise DuplicateError(ResponseMessages.EMAIL_ALREADY_REGISTERED)

            request = OrganizerRequest(
                request_id=ServiceHelpers.next_id(self.db, OrganizerRequest),
                organizer_type=data.organizer_type.value,
                organizer_name=data.organizer_name,
                email=email,
                phone=data.phone,
                address=data.address,
                password=get_password_hash(data.password),
                status=ApprovalStatus.PENDING.value,
                tracking_token=self._new_token(),
            )
            self.db.add(request)

        logger.info(f"Organizer request {request.request_id} submitted for {email}")
        return request

    def submit_user_request(self, data: UserRequestCreate) -> UserRequest:
        email = data.email.lower()

        with write_transaction(self.db):
            if self._has_pending(UserRequest, email):
                raise DuplicateError(ResponseMessages.PENDING_REQUEST_EXISTS)

            if User.find_by_email(self.db, email):
                raise DuplicateError(ResponseMessages.EMAIL_ALREADY_REGISTERED)

            request = UserRequest(
                request_id=ServiceHelpers.next_id(self.db, UserRequest),
                name=data.name,
                email=email,
                password=get_password_hash(data.password),
                phone=data.phone,
                gender=data.gender,
                dob=data.dob,
                profile_picture=data.profile_picture or "",
                status=ApprovalStatus.PENDING.value,
                tracking_token=self._new_token(),
            )
            self.db.add(request)

        logger.info(f"User request {request.request_id} submitted for {email}")
        return request

    def submit_venue_request(
        self, organizer_id: int, data: VenueRequestCreate
    ) -> VenueRequest:
        """Both the full venue description and the short legacy form are accepted"""
        if data.is_legacy:
            name = data.location_name.strip()
            fields = dict(
                name=name,
                address=name,
                capacity=AppConstants.LEGACY_VENUE_CAPACITY,
                latitude=AppConstants.LEGACY_VENUE_COORDINATE,
                longitude=AppConstants.LEGACY_VENUE_COORDINATE,
            )
        else:
            fields = dict(
                name=data.name.strip(),
                address=data.address.strip(),
                capacity=data.capacity,
                latitude=data.latitude or 0.0,
                longitude=data.longitude or 0.0,
            )

        with write_transaction(self.db):
            request = VenueRequest(
                request_id=ServiceHelpers.next_id(self.db, VenueRequest),
                organizer_id=organizer_id,
                reason=ValidationHelpers.sanitize_text(data.reason),
                status=ApprovalStatus.PENDING.value,
                tracking_token=self._new_token(),
                **fields,
            )
            self.db.add(request)

        logger.info(
            f"Venue request {request.request_id} submitted by organizer {organizer_id}"
        )
        return request

    def get_organizer_venue_requests(self, organizer_id: int) -> List[VenueRequest]:
        return (
            self.db.query(VenueRequest)
            .filter(
                VenueRequest.organizer_id == organizer_id,
                VenueRequest.deleted == False,
            )
            .order_by(VenueRequest.request_id)
            .all()
        )

    def track_request(self, token: str) -> Tuple[str, TrackedRequest]:
        """
        Look a request up by tracking token. The format is validated before
        any lookup so a malformed token is never reported as "not found".
        Returns (type, request) where type is organizer, venue or user.
        """
        ValidationHelpers.require_tracking_token(token)
        token = token.lower()

        request = (
            self.db.query(OrganizerRequest)
            .filter(OrganizerRequest.tracking_token == token)
            .first()
        )
        if request:
            return "organizer", request

        request = (
            self.db.query(VenueRequest)
            .filter(VenueRequest.tracking_token == token, VenueRequest.deleted == False)
            .first()
        )
        if request:
            return "venue", request

        request = (
            self.db.query(UserRequest).filter(UserRequest.tracking_token == token).first()
        )
        if request:
            return "user", request

        raise NotFoundError("Request not found with the provided tracking token")

    # Private helpers

    def _has_pending(self, model, email: str) -> bool:
        return (
            self.db.query(model)
            .filter(model.email == email, model.status == ApprovalStatus.PENDING.value)
            .first()
            is not None
        )

    def _new_token(self) -> str:
        # Tokens are unique across all three queues
        while True:
            token = generate_tracking_token()
            taken = any(
                self.db.query(model).filter(model.tracking_token == token).first()
                for model in (OrganizerRequest, VenueRequest, UserRequest)
            )
            if not taken:
                return token
