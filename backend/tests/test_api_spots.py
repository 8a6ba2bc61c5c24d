"""
HTTP tests for /api/spots (routing, status codes, error envelope).
"""

import pytest


def _create(client, headers, **body):
    body.setdefault("name", "Hill A")
    response = client.post("/api/spots", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_root_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "SlopeScout API is running!"


def test_owner_lifecycle_scenario(client, alice_headers, bob_headers):
    spot = _create(client, alice_headers, name="Hill A", difficulty="Easy")

    forbidden = client.put(f"/api/spots/{spot['id']}", json={"difficulty": "Hard"}, headers=bob_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["kind"] == "forbidden"

    updated = client.put(f"/api/spots/{spot['id']}", json={"difficulty": "Hard"}, headers=alice_headers)
    assert updated.status_code == 200
    assert updated.json()["difficulty"] == "Hard"
    assert updated.json()["name"] == "Hill A"

    deleted = client.delete(f"/api/spots/{spot['id']}", headers=alice_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Spot deleted successfully"}

    missing = client.get(f"/api/spots/{spot['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Spot not found.", "kind": "not_found", "fields": None}


def test_save_scenario(client, alice_headers):
    spot = _create(client, alice_headers, name="Bowl")

    first = client.post(f"/api/spots/{spot['id']}/save", headers=alice_headers)
    assert first.status_code == 201
    assert first.json()["data"]["spot_id"] == spot["id"]

    second = client.post(f"/api/spots/{spot['id']}/save", headers=alice_headers)
    assert second.status_code == 409
    assert second.json()["kind"] == "conflict"

    saved = client.get("/api/spots/users/me/saved-spots", headers=alice_headers)
    assert [s["id"] for s in saved.json()] == [spot["id"]]

    assert client.delete(f"/api/spots/{spot['id']}/unsave", headers=alice_headers).status_code == 200
    assert client.delete(f"/api/spots/{spot['id']}/unsave", headers=alice_headers).status_code == 200

    assert client.get("/api/spots/users/me/saved-spots", headers=alice_headers).json() == []


def test_create_requires_token_and_writes_nothing(client, fake_supabase):
    response = client.post("/api/spots", json={"name": "Hill A", "user_id": "spoofed"})

    assert response.status_code == 401
    assert response.json()["kind"] == "unauthenticated"
    assert fake_supabase.tables["spots"] == []


def test_create_ignores_body_user_id(client, alice_headers, bob_headers):
    spot = _create(client, alice_headers, user_id="22222222-2222-2222-2222-222222222222")

    assert spot["owner_id"] == "11111111-1111-1111-1111-111111111111"


def test_create_with_blank_name_is_400_with_field_detail(client, alice_headers):
    response = client.post(
        "/api/spots",
        json={"name": "  ", "difficulty": "Easy", "location": {"lat": 1, "lng": 2}},
        headers=alice_headers,
    )

    body = response.json()
    assert response.status_code == 400
    assert body["kind"] == "validation_failed"
    assert body["fields"]["name"] == "Name is required."


def test_create_with_bad_location_reports_nested_field(client, alice_headers):
    response = client.post(
        "/api/spots",
        json={"name": "Hill", "location": {"lat": 100, "lng": 0}},
        headers=alice_headers,
    )

    assert response.status_code == 400
    assert "location.lat" in response.json()["fields"]


def test_location_round_trip_over_http(client, alice_headers):
    spot = _create(client, alice_headers, location={"lat": 40.0, "lng": -74.5})

    fetched = client.get(f"/api/spots/{spot['id']}").json()

    assert fetched["location"] == {"lat": 40.0, "lng": -74.5}


def test_invalid_token_is_401(client):
    response = client.put("/api/spots/1", json={"name": "x"}, headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


def test_non_integer_id_is_400(client):
    response = client.get("/api/spots/abc")

    assert response.status_code == 400
    assert "spot_id" in response.json()["fields"]


def test_update_rejects_immutable_fields(client, alice_headers):
    spot = _create(client, alice_headers)

    response = client.put(f"/api/spots/{spot['id']}", json={"owner_id": "x"}, headers=alice_headers)

    assert response.status_code == 400
    assert "owner_id" in response.json()["error"]


def test_update_empty_patch_is_400(client, alice_headers):
    spot = _create(client, alice_headers)

    response = client.put(f"/api/spots/{spot['id']}", json={}, headers=alice_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields provided for update."


def test_update_empty_patch_by_non_owner_is_403(client, alice_headers, bob_headers):
    spot = _create(client, alice_headers)

    response = client.put(f"/api/spots/{spot['id']}", json={}, headers=bob_headers)

    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


def test_update_empty_patch_for_missing_spot_is_404(client, alice_headers):
    response = client.put("/api/spots/999", json={}, headers=alice_headers)

    assert response.status_code == 404


def test_update_missing_spot_is_404(client, bob_headers):
    response = client.put("/api/spots/999", json={"name": "x"}, headers=bob_headers)

    assert response.status_code == 404


def test_delete_by_non_owner_is_403(client, alice_headers, bob_headers):
    spot = _create(client, alice_headers)

    assert client.delete(f"/api/spots/{spot['id']}", headers=bob_headers).status_code == 403
    assert client.get(f"/api/spots/{spot['id']}").status_code == 200


def test_delete_requires_token(client):
    assert client.delete("/api/spots/1").status_code == 401


def test_list_spots_with_filters(client, alice_headers):
    _create(client, alice_headers, name="Bunny", difficulty="Easy", elevation_gain=50)
    _create(client, alice_headers, name="Ridge", difficulty="Hard", elevation_gain=900)

    everything = client.get("/api/spots").json()
    hard = client.get("/api/spots", params={"difficulty": "Hard"}).json()
    low = client.get("/api/spots", params={"max_elevation": 100}).json()

    assert [s["name"] for s in everything] == ["Ridge", "Bunny"]
    assert [s["name"] for s in hard] == ["Ridge"]
    assert [s["name"] for s in low] == ["Bunny"]


@pytest.mark.parametrize(
    "params",
    [{"difficulty": "Extreme"}, {"min_elevation": "high"}, {"min_elevation": 10, "max_elevation": 5}],
)
def test_list_spots_bad_filters_are_400(client, params):
    assert client.get("/api/spots", params=params).status_code == 400


def test_my_spots_requires_token_and_scopes_to_caller(client, alice_headers, bob_headers):
    _create(client, alice_headers, name="Alice's")
    _create(client, bob_headers, name="Bob's")

    assert client.get("/api/spots/user/my-spots").status_code == 401
    mine = client.get("/api/spots/user/my-spots", headers=bob_headers).json()
    assert [s["name"] for s in mine] == ["Bob's"]


def test_save_missing_spot_is_404(client, alice_headers):
    assert client.post("/api/spots/31/save", headers=alice_headers).status_code == 404


def test_saved_spots_requires_token(client):
    assert client.get("/api/spots/users/me/saved-spots").status_code == 401


def test_unsave_requires_token(client):
    assert client.delete("/api/spots/1/unsave").status_code == 401


def test_reviews_create_and_list(client, alice_headers, bob_headers):
    spot = _create(client, alice_headers)

    created = client.post(
        f"/api/spots/{spot['id']}/reviews", json={"rating": 5, "comment": " Great "}, headers=bob_headers
    )
    assert created.status_code == 201
    assert created.json()["comment"] == "Great"

    client.post(f"/api/spots/{spot['id']}/reviews", json={"rating": 1, "comment": "Ouch"}, headers=bob_headers)

    listed = client.get(f"/api/spots/{spot['id']}/reviews").json()
    assert [r["comment"] for r in listed] == ["Ouch", "Great"]


@pytest.mark.parametrize("rating", [0, 6, 1.5, "5"])
def test_review_rating_boundaries_over_http(client, alice_headers, rating):
    spot = _create(client, alice_headers)

    response = client.post(
        f"/api/spots/{spot['id']}/reviews", json={"rating": rating, "comment": "ok"}, headers=alice_headers
    )

    assert response.status_code == 400
    assert "rating" in response.json()["fields"]


def test_review_requires_token_and_existing_spot(client, alice_headers):
    assert client.post("/api/spots/1/reviews", json={"rating": 3, "comment": "x"}).status_code == 401
    assert (
        client.post("/api/spots/50/reviews", json={"rating": 3, "comment": "x"}, headers=alice_headers).status_code
        == 404
    )


def test_store_failure_is_500_without_internal_detail(client, fake_supabase):
    fake_supabase.broken_tables.add("spots")

    response = client.get("/api/spots")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to list spots.", "kind": "store_unavailable", "fields": None}
