import os
import logging
from dotenv import load_dotenv
from sqlalchemy.orm import Session
from ..models.enums import ApprovalStatus, UserRole, VenueAvailability
from ..models.user import User
from ..models.venue import Venue
from .constants import SAMPLE_VENUES
from .security import get_password_hash
from .service_helpers import ServiceHelpers, write_transaction

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
SEED_SAMPLE_VENUES = os.getenv("SEED_SAMPLE_VENUES", "true").lower() in ("1", "true", "yes")


def seed_default_admin(db: Session) -> bool:
    """Create the bootstrap admin unless an account already uses its email"""
    email = DEFAULT_ADMIN_EMAIL.lower()

    with write_transaction(db):
        if db.query(User).filter(User.email == email).first():
            return False

        db.add(
            User(
                user_id=ServiceHelpers.next_id(db, User),
                name="Admin User",
                email=email,
                password=get_password_hash(DEFAULT_ADMIN_PASSWORD),
                phone="1234567890",
                gender="Other",
                dob="1990-01-01",
                profile_picture="",
                role=UserRole.ADMIN.value,
                approval_status=ApprovalStatus.APPROVED.value,
            )
        )

    logger.info(f"Default admin user created: {email}")
    return True


def seed_sample_venues(db: Session) -> int:
    """Populate an empty venues table with the sample venues"""
    if not SEED_SAMPLE_VENUES:
        return 0

    with write_transaction(db):
        if db.query(Venue).count() > 0:
            return 0

        for sample in SAMPLE_VENUES:
            db.add(
                Venue(
                    venue_id=ServiceHelpers.next_id(db, Venue),
                    availability_status=VenueAvailability.AVAILABLE.value,
                    **sample,
                )
            )

    logger.info(f"Seeded {len(SAMPLE_VENUES)} sample venues")
    return len(SAMPLE_VENUES)
