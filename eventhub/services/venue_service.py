from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from ..errors import ConflictError
from ..models.enums import VenueAvailability
from ..models.venue import Venue
from ..schemas.venue import VenueCreate, VenueUpdate
from ..utils.service_helpers import ServiceHelpers, write_transaction

logger = logging.getLogger(__name__)


class VenueService:
    def __init__(self, db: Session):
        self.db = db

    def get_available_venues(self) -> List[Venue]:
        """Venues organizers may book"""
        return (
            self.db.query(Venue)
            .filter(
                Venue.deleted == False,
                Venue.availability_status == VenueAvailability.AVAILABLE.value,
            )
            .order_by(Venue.venue_id)
            .all()
        )

    def list_venues(self, include_deleted: bool = False) -> List[Venue]:
        query = ServiceHelpers.active(self.db.query(Venue), Venue, include_deleted)
        return query.order_by(Venue.venue_id).all()

    def get_venue(self, venue_id: int) -> Venue:
        return ServiceHelpers.get_or_raise(self.db, Venue, venue_id, "Venue")

    def create_venue(self, data: VenueCreate) -> Venue:
        with write_transaction(self.db):
            venue = Venue(
                venue_id=ServiceHelpers.next_id(self.db, Venue),
                name=data.name.strip(),
                address=data.address.strip(),
                capacity=data.capacity,
                latitude=data.latitude,
                longitude=data.longitude,
                availability_status=data.availability_status.value,
            )
            self.db.add(venue)

        logger.info(f"Venue {venue.venue_id} created")
        return venue

    def update_venue(self, venue_id: int, updates: VenueUpdate) -> Venue:
        with write_transaction(self.db):
            venue = ServiceHelpers.get_or_raise(self.db, Venue, venue_id, "Venue")

            changes = updates.model_dump(exclude_unset=True, exclude_none=True)
            if "availability_status" in changes:
                changes["availability_status"] = updates.availability_status.value
            for field, value in changes.items():
                setattr(venue, field, value)

        return venue

    def delete_venue(self, venue_id: int) -> Venue:
        with write_transaction(self.db):
            venue = ServiceHelpers.get_or_raise(self.db, Venue, venue_id, "Venue")
            venue.deleted = True

        logger.info(f"Venue {venue_id} deleted")
        return venue

    def approve_venue(self, venue_id: int) -> Venue:
        return self._set_availability(venue_id, VenueAvailability.AVAILABLE, None)

    def reject_venue(self, venue_id: int, comment: Optional[str] = None) -> Venue:
        return self._set_availability(venue_id, VenueAvailability.UNAVAILABLE, comment)

    def _set_availability(
        self, venue_id: int, availability: VenueAvailability, comment: Optional[str]
    ) -> Venue:
        with write_transaction(self.db):
            venue = ServiceHelpers.get_or_raise(self.db, Venue, venue_id, "Venue")

            if venue.availability_status == availability.value:
                raise ConflictError(f"Venue is already {availability.value.lower()}")

            previous = venue.availability_status
            venue.availability_status = availability.value
            venue.admin_comment = (comment or "").strip() or None

        logger.info(f"venue {venue_id}: {previous} -> {availability.value}")
        return venue
