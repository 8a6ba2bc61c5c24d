"""
Unit tests for spot ownership and CRUD (app/services/spots.py).
"""

import pytest

from app.core.errors import Forbidden, NotFound, StoreUnavailable, ValidationFailed
from app.models.spot import Difficulty, Location
from app.schemas.spot import SpotCreate, SpotUpdate
from app.services import spots as spot_service


@pytest.fixture
def hill(db, alice):
    return spot_service.create_spot(SpotCreate(name="Hill A", difficulty="Easy"), alice, db)


def test_create_assigns_id_owner_and_timestamp(db, alice):
    spot = spot_service.create_spot(
        SpotCreate(name="Hill A", description="Long run", elevation_gain="150"),
        alice,
        db,
    )

    assert spot.id == 1
    assert spot.owner_id == alice.id
    assert spot.elevation_gain == 150.0
    assert spot.created_at.microsecond == 123450
    assert spot.plottable is False


def test_create_uses_caller_not_body_user_id(db, alice, bob, fake_supabase):
    spot = spot_service.create_spot(SpotCreate(name="Hill A", user_id=bob.id), alice, db)

    assert spot.owner_id == alice.id
    assert fake_supabase.tables["spots"][0]["user_id"] == alice.id


def test_location_round_trip_keeps_coordinates(db, alice):
    created = spot_service.create_spot(
        SpotCreate(name="Hill A", location={"lat": 40.0, "lng": -74.5}), alice, db
    )

    fetched = spot_service.get_spot(created.id, db)

    assert fetched.location == Location(lat=40.0, lng=-74.5)
    assert fetched.plottable is True


def test_get_missing_spot_is_not_found(db):
    with pytest.raises(NotFound):
        spot_service.get_spot(999, db)


def test_update_by_owner_changes_only_patched_fields(db, alice, hill):
    updated = spot_service.update_spot(hill.id, SpotUpdate(difficulty="Hard"), alice, db)

    assert updated.difficulty is Difficulty.HARD
    assert updated.name == "Hill A"


def test_update_by_other_user_is_forbidden_and_writes_nothing(db, bob, hill, fake_supabase):
    with pytest.raises(Forbidden):
        spot_service.update_spot(hill.id, SpotUpdate(name="Mine now"), bob, db)

    assert fake_supabase.tables["spots"][0]["name"] == "Hill A"
    assert ("spots", "update") not in fake_supabase.calls


def test_update_missing_spot_is_not_found_before_forbidden(db, bob):
    with pytest.raises(NotFound):
        spot_service.update_spot(42, SpotUpdate(name="x"), bob, db)


def test_update_with_empty_patch_fails_validation(db, alice, hill, fake_supabase):
    with pytest.raises(ValidationFailed) as exc_info:
        spot_service.update_spot(hill.id, SpotUpdate(), alice, db)

    assert "No valid fields" in exc_info.value.message
    assert ("spots", "update") not in fake_supabase.calls


def test_empty_patch_from_non_owner_is_forbidden(db, bob, hill):
    with pytest.raises(Forbidden):
        spot_service.update_spot(hill.id, SpotUpdate(), bob, db)


def test_empty_patch_for_missing_spot_is_not_found(db, alice):
    with pytest.raises(NotFound):
        spot_service.update_spot(42, SpotUpdate(), alice, db)


def test_update_is_conditional_on_owner_at_write_time(db, alice, bob, hill, fake_supabase, monkeypatch):
    """Ownership changing between the check and the write must not let the write through."""
    original_update = db.update_spot_if_owner

    def steal_then_update(spot_id, owner_id, fields):
        fake_supabase.tables["spots"][0]["user_id"] = bob.id
        return original_update(spot_id, owner_id, fields)

    monkeypatch.setattr(db, "update_spot_if_owner", steal_then_update)

    with pytest.raises(NotFound):
        spot_service.update_spot(hill.id, SpotUpdate(name="Renamed"), alice, db)
    assert fake_supabase.tables["spots"][0]["name"] == "Hill A"


def test_delete_by_owner_then_get_is_not_found(db, alice, hill):
    spot_service.delete_spot(hill.id, alice, db)

    with pytest.raises(NotFound):
        spot_service.get_spot(hill.id, db)


def test_delete_by_other_user_is_forbidden(db, bob, hill, fake_supabase):
    with pytest.raises(Forbidden):
        spot_service.delete_spot(hill.id, bob, db)

    assert len(fake_supabase.tables["spots"]) == 1


def test_delete_missing_spot_is_not_found(db, alice):
    with pytest.raises(NotFound):
        spot_service.delete_spot(7, alice, db)


def test_delete_with_zero_rows_removed_is_not_success(db, alice, hill, fake_supabase):
    fake_supabase.block_deletes = True

    with pytest.raises(NotFound):
        spot_service.delete_spot(hill.id, alice, db)


def test_delete_without_row_count_is_store_failure(db, alice, hill, fake_supabase):
    fake_supabase.report_delete_count = False

    with pytest.raises(StoreUnavailable):
        spot_service.delete_spot(hill.id, alice, db)


def test_delete_leaves_saved_and_review_rows_in_place(db, alice, bob, hill, fake_supabase):
    fake_supabase.tables["saved_spots"].append({"id": 1, "user_id": bob.id, "spot_id": hill.id})

    spot_service.delete_spot(hill.id, alice, db)

    assert fake_supabase.tables["saved_spots"] == [{"id": 1, "user_id": bob.id, "spot_id": hill.id}]


# Listing
@pytest.fixture
def catalogue(db, alice, bob):
    specs = [
        (alice, SpotCreate(name="Bunny", difficulty="Easy", elevation_gain=50)),
        (alice, SpotCreate(name="Ridge", difficulty="Hard", elevation_gain=900)),
        (bob, SpotCreate(name="Bowl", difficulty="Medium", elevation_gain=300)),
        (bob, SpotCreate(name="Unknown")),
    ]
    return [spot_service.create_spot(payload, owner, db) for owner, payload in specs]


def test_list_spots_newest_first(db, catalogue):
    names = [spot.name for spot in spot_service.list_spots(db)]

    assert names == ["Unknown", "Bowl", "Ridge", "Bunny"]


def test_list_spots_filters_combine(db, catalogue):
    assert [s.name for s in spot_service.list_spots(db, difficulty=Difficulty.HARD)] == ["Ridge"]
    assert [s.name for s in spot_service.list_spots(db, min_elevation=100, max_elevation=500)] == ["Bowl"]
    assert [s.name for s in spot_service.list_spots(db, max_elevation=1000)] == ["Bowl", "Ridge", "Bunny"]


def test_list_spots_rejects_inverted_bounds(db):
    with pytest.raises(ValidationFailed) as exc_info:
        spot_service.list_spots(db, min_elevation=500, max_elevation=100)

    assert "min_elevation" in exc_info.value.fields


def test_list_user_spots_only_returns_callers(db, alice, catalogue):
    names = [spot.name for spot in spot_service.list_user_spots(alice, db)]

    assert names == ["Ridge", "Bunny"]


def test_store_failure_surfaces_as_store_unavailable(db, fake_supabase):
    fake_supabase.broken_tables.add("spots")

    with pytest.raises(StoreUnavailable) as exc_info:
        spot_service.list_spots(db)

    assert "08006" not in exc_info.value.message
