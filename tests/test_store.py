from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from eventhub.errors import NotFoundError, StorageError
from eventhub.models.venue import Venue
from eventhub.schemas.venue import VenueCreate
from eventhub.services.user_service import UserService
from eventhub.services.venue_service import VenueService
from eventhub.utils.seed import seed_default_admin, seed_sample_venues
from eventhub.utils.service_helpers import ServiceHelpers


def new_venue(name):
    return VenueCreate(name=name, address=f"{name} Street", capacity=50)


class TestIdentifiers:
    def test_empty_table_starts_at_one(self, db):
        assert ServiceHelpers.next_id(db, Venue) == 1

    def test_ids_increase_across_soft_deletes(self, db):
        service = VenueService(db)
        assigned = []
        for name in ("Alpha", "Beta", "Gamma"):
            venue = service.create_venue(new_venue(name))
            assigned.append(venue.venue_id)
            service.delete_venue(venue.venue_id)

        last = service.create_venue(new_venue("Delta"))

        assert assigned == [1, 2, 3]
        assert last.venue_id == 4


class TestSoftDelete:
    def test_deleted_venue_hidden_but_kept(self, db):
        service = VenueService(db)
        kept = service.create_venue(new_venue("Kept"))
        gone = service.create_venue(new_venue("Gone"))
        service.delete_venue(gone.venue_id)

        assert [v.venue_id for v in service.list_venues()] == [kept.venue_id]
        assert [v.venue_id for v in service.list_venues(include_deleted=True)] == [
            kept.venue_id,
            gone.venue_id,
        ]
        assert db.get(Venue, gone.venue_id).deleted is True
        with pytest.raises(NotFoundError):
            service.get_venue(gone.venue_id)

    def test_user_reactivation(self, db, user):
        service = UserService(db)
        service.deactivate_user(user.user_id)

        assert service.list_users() == []
        assert service.reactivate_user(user.user_id).deleted is False


class TestStorageFailures:
    def test_failed_commit_becomes_storage_error(self, db):
        failure = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with patch.object(db, "commit", side_effect=failure):
            with pytest.raises(StorageError):
                VenueService(db).create_venue(new_venue("Doomed"))

        assert db.query(Venue).count() == 0

    def test_storage_error_is_a_503(self, client, db, admin_headers):
        failure = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with patch.object(db, "commit", side_effect=failure):
            response = client.post(
                "/api/admin/venues",
                json={"name": "Doomed", "address": "Nowhere", "capacity": 10},
                headers=admin_headers,
            )

        assert response.status_code == 503
        assert response.json()["message"] == "Storage is unavailable"


class TestSeeding:
    def test_admin_and_venues_seeded_once(self, db):
        assert seed_default_admin(db) is True
        assert seed_default_admin(db) is False
        assert seed_sample_venues(db) == 3
        assert seed_sample_venues(db) == 0

        names = [v.name for v in VenueService(db).list_venues()]
        assert names == [
            "Grand Convention Center",
            "Riverside Auditorium",
            "City Park Amphitheater",
        ]
        admins = UserService(db).list_users(role="admin")
        assert len(admins) == 1
        assert admins[0].is_admin
