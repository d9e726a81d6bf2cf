# tests/test_api_trackers.py
from models import Tracker, TrackerParticipant

from conftest import make_tracker, make_user


def test_create_and_list_trackers(client, db, auth_headers):
    ana = make_user(db, "ana@example.com", "Ana")

    created = client.post(
        "/api/trackers",
        data={"name": "Madrid 2026", "description": "Near Retiro"},
        headers=auth_headers(ana),
    )
    assert created.status_code == 201
    body = created.json()
    assert body["owner_id"] == ana.id
    assert body["owner"]["email"] == "ana@example.com"
    assert body["participants"] == []

    listed = client.get("/api/trackers", headers=auth_headers(ana))
    assert [t["name"] for t in listed.json()] == ["Madrid 2026"]


def test_create_requires_name(client, db, auth_headers):
    ana = make_user(db, "ana@example.com", "Ana")
    response = client.post("/api/trackers", data={"name": ""}, headers=auth_headers(ana))
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required"}


def test_list_includes_shared_trackers_only(client, people, auth_headers):
    tracker_id = people["tracker"].id

    for key in ("owner", "admin", "member"):
        listed = client.get("/api/trackers", headers=auth_headers(people[key])).json()
        assert [t["id"] for t in listed] == [tracker_id]

    assert client.get("/api/trackers", headers=auth_headers(people["stranger"])).json() == []


def test_tracker_detail_reports_caller_role(client, people, auth_headers):
    url = f"/api/trackers/{people['tracker'].id}"

    assert client.get(url, headers=auth_headers(people["owner"])).json()["role"] == "Owner"
    assert client.get(url, headers=auth_headers(people["admin"])).json()["role"] == "Admin"
    detail = client.get(url, headers=auth_headers(people["member"])).json()
    assert detail["role"] == "Participant"
    assert [p["user"]["email"] for p in detail["participants"]] == ["admin@example.com", "member@example.com"]


def test_tracker_access_errors(client, db, people, auth_headers):
    url = f"/api/trackers/{people['tracker'].id}"

    anonymous = client.get(url)
    assert anonymous.status_code == 401

    stranger = client.get(url, headers=auth_headers(people["stranger"]))
    assert stranger.status_code == 403
    assert stranger.json() == {"error": "Access denied"}

    missing = client.get("/api/trackers/9999", headers=auth_headers(people["owner"]))
    assert missing.status_code == 404
    assert missing.json() == {"error": "Tracker not found"}

    malformed = client.get("/api/trackers/abc", headers=auth_headers(people["owner"]))
    assert malformed.status_code == 400


def test_deleting_tracker_cascades(db, people):
    make_tracker(db, people["stranger"], name="Other")
    db.delete(db.get(Tracker, people["tracker"].id))
    db.commit()

    assert db.query(TrackerParticipant).count() == 0
    assert db.query(Tracker).count() == 1
