# tests/conftest.py

import os

# Cheap hashes for the test run; read when eventhub.utils.security is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventhub.database import Base, get_db
from eventhub.main import app
from eventhub.models.enums import (
    ApprovalStatus,
    EventStatus,
    OrganizerType,
    UserRole,
    VenueAvailability,
)
from eventhub.models.event import Event
from eventhub.models.organizer import Organizer
from eventhub.models.user import User
from eventhub.models.venue import Venue
from eventhub.utils.security import create_access_token, get_password_hash
from eventhub.utils.service_helpers import ServiceHelpers

TEST_PASSWORD = "secret123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session")
def password_hash():
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    TestClient bound to the per-test database. It is not entered as a
    context manager so the startup seeding never touches a real database.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Record factories ---


@pytest.fixture
def make_user(db, password_hash):
    def _make_user(email="user@example.com", role=UserRole.USER, **fields):
        user = User(
            user_id=ServiceHelpers.next_id(db, User),
            name=fields.pop("name", "Test User"),
            email=email,
            password=password_hash,
            phone="5551234567",
            gender="Other",
            dob="1995-05-05",
            role=UserRole(role).value,
            approval_status=fields.pop("approval_status", ApprovalStatus.APPROVED.value),
            **fields,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_organizer(db, password_hash):
    def _make_organizer(email="organizer@example.com", **fields):
        organizer = Organizer(
            organizer_id=ServiceHelpers.next_id(db, Organizer),
            organizer_type=OrganizerType.COMPANY.value,
            organizer_name=fields.pop("organizer_name", "Acme Events"),
            email=email,
            password=password_hash,
            phone="5559876543",
            address="1 Market Street",
            status=fields.pop("status", ApprovalStatus.APPROVED.value),
            **fields,
        )
        db.add(organizer)
        db.commit()
        return organizer

    return _make_organizer


@pytest.fixture
def make_venue(db):
    def _make_venue(capacity=100, **fields):
        venue = Venue(
            venue_id=ServiceHelpers.next_id(db, Venue),
            name=fields.pop("name", "Main Hall"),
            address=fields.pop("address", "10 Hall Road"),
            capacity=capacity,
            latitude=0.0,
            longitude=0.0,
            availability_status=fields.pop(
                "availability_status", VenueAvailability.AVAILABLE.value
            ),
            **fields,
        )
        db.add(venue)
        db.commit()
        return venue

    return _make_venue


@pytest.fixture
def make_event(db):
    def _make_event(organizer, venue, **fields):
        start = datetime(2030, 6, 1, 18, 0)
        event = Event(
            event_id=ServiceHelpers.next_id(db, Event),
            organizer_id=organizer.organizer_id,
            venue_id=venue.venue_id,
            event_name=fields.pop("event_name", "Summer Concert"),
            description="An evening of music",
            rules_and_restrictions="No outside food",
            type="Music Concert",
            tickets_provided=fields.pop("tickets_provided", 10),
            max_tickets_per_user=fields.pop("max_tickets_per_user", 4),
            ticket_price=fields.pop("ticket_price", 25.0),
            start_time=start,
            end_time=start + timedelta(hours=3),
            status=fields.pop("status", EventStatus.ACTIVE.value),
            approval_status=fields.pop("approval_status", ApprovalStatus.APPROVED.value),
            **fields,
        )
        db.add(event)
        db.commit()
        return event

    return _make_event


# --- Common actors ---


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=UserRole.ADMIN, name="Admin User")


@pytest.fixture
def organizer(make_organizer):
    return make_organizer()


@pytest.fixture
def venue(make_venue):
    return make_venue()


@pytest.fixture
def event(make_event, organizer, venue):
    return make_event(organizer, venue)


def auth_headers(account) -> dict:
    """Bearer header for an account, minted the way login does"""
    if isinstance(account, Organizer):
        claims = {
            "account_id": account.organizer_id,
            "account_type": "organizer",
            "email": account.email,
            "name": account.organizer_name,
        }
    else:
        claims = {
            "account_id": account.user_id,
            "account_type": "user",
            "email": account.email,
            "name": account.name,
        }
    claims["sub"] = f"{claims['account_type']}:{claims['account_id']}"
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def organizer_headers(organizer):
    return auth_headers(organizer)


@pytest.fixture
def headers_for():
    return auth_headers
