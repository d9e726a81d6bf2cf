# tests/test_api_flats.py
from models import Flat
from services.flat_service import FlatService

from conftest import make_flat, make_tracker, make_user, on_event_loop


def _url(people):
    return f"/api/trackers/{people['tracker'].id}/flats"


def test_owner_creates_flat_with_commutes(client, people, auth_headers):
    owner, admin = people["owner"], people["admin"]
    response = client.post(
        _url(people),
        data={
            "name": "Calle Mayor 12",
            "status": "Seen",
            "createdById": str(owner.id),
            "price": "1250",
            "bedrooms": "2",
            "url": "",
            f"commuteTime_{owner.id}": "20",
            f"commuteTime_{admin.id}": "0",
        },
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["price"] == 1250.0
    assert body["url"] is None
    assert body["created_by"]["name"] == "Olga"
    assert [(c["user_id"], c["time_minutes"]) for c in body["commute_times"]] == [(owner.id, 20)]


def test_members_cannot_write_flats(client, db, people, auth_headers):
    response = client.post(
        _url(people),
        data={"name": "Flat", "status": "Seen", "createdById": str(people["admin"].id)},
        headers=auth_headers(people["admin"]),
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Only the tracker owner can add flats"}

    flat = make_flat(db, people["tracker"], people["owner"])
    update = client.put(
        _url(people),
        data={"flatId": str(flat.id), "status": "Visited"},
        headers=auth_headers(people["member"]),
    )
    assert update.status_code == 403


def test_create_validation_errors(client, people, auth_headers):
    headers = auth_headers(people["owner"])

    missing = client.post(_url(people), data={"name": "Flat"}, headers=headers)
    assert missing.json() == {"error": "Name, status, and creator are required"}

    negative = client.post(
        _url(people),
        data={"name": "Flat", "status": "Seen", "createdById": str(people["owner"].id), "area": "-3"},
        headers=headers,
    )
    assert negative.status_code == 400
    assert negative.json() == {"error": "Invalid area value"}


def test_partial_update(client, db, people, auth_headers):
    flat = make_flat(db, people["tracker"], people["owner"], price=900.0, description="Sunny")
    headers = auth_headers(people["owner"])

    response = client.put(
        _url(people),
        data={"flatId": str(flat.id), "status": "VisitArranged", "description": ""},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "VisitArranged"
    assert body["description"] is None
    assert body["price"] == 900.0

    db.expire_all()
    assert db.get(Flat, flat.id).status.value == "VisitArranged"


def test_update_errors(client, db, people, auth_headers):
    headers = auth_headers(people["owner"])
    flat = make_flat(db, people["tracker"], people["owner"])

    nothing = client.put(_url(people), data={"flatId": str(flat.id)}, headers=headers)
    assert nothing.status_code == 400
    assert nothing.json() == {"error": "No fields to update"}

    other_owner = make_user(db, "other@example.com", "Other")
    foreign = make_flat(db, make_tracker(db, other_owner, name="Elsewhere"), other_owner)
    cross = client.put(_url(people), data={"flatId": str(foreign.id), "status": "Seen"}, headers=headers)
    assert cross.status_code == 404
    assert cross.json() == {"error": "Flat not found"}


def test_list_flats_for_members_only(client, db, people, auth_headers):
    make_flat(db, people["tracker"], people["owner"], name="First")
    make_flat(db, people["tracker"], people["owner"], name="Second")

    listed = client.get(_url(people), headers=auth_headers(people["member"]))
    assert listed.status_code == 200
    assert [f["name"] for f in listed.json()] == ["Second", "First"]

    denied = client.get(_url(people), headers=auth_headers(people["stranger"]))
    assert denied.status_code == 403


def test_commute_summary(client, db, people, auth_headers):
    owner, admin = people["owner"], people["admin"]
    flat = make_flat(db, people["tracker"], owner, commutes={owner.id: 15, admin.id: 20})
    empty = make_flat(db, people["tracker"], owner, name="No commutes")
    headers = auth_headers(people["member"])

    summary = client.get(f"{_url(people)}/{flat.id}/commute", headers=headers).json()
    assert summary["average_minutes"] == 18
    assert summary["display"] == "18 min"
    assert summary["show_average"] is True
    assert [e["minutes"] for e in summary["breakdown"]] == [15, 20]

    no_data = client.get(f"{_url(people)}/{empty.id}/commute", headers=headers).json()
    assert no_data["has_data"] is False
    assert no_data["display"] == "No data"
    assert no_data["breakdown"] == []


def test_flat_writes_run_off_the_event_loop(client, db, people, auth_headers, monkeypatch):
    calls = []
    original_create, original_update = FlatService.create, FlatService.update

    def create(self, access, form):
        calls.append(("create", on_event_loop()))
        return original_create(self, access, form)

    def update(self, access, form):
        calls.append(("update", on_event_loop()))
        return original_update(self, access, form)

    monkeypatch.setattr(FlatService, "create", create)
    monkeypatch.setattr(FlatService, "update", update)
    headers = auth_headers(people["owner"])

    created = client.post(
        _url(people),
        data={"name": "Flat", "status": "Seen", "createdById": str(people["owner"].id)},
        headers=headers,
    )
    assert created.status_code == 201
    updated = client.put(_url(people), data={"flatId": str(created.json()["id"]), "status": "Visited"}, headers=headers)
    assert updated.status_code == 200
    assert calls == [("create", False), ("update", False)]


def test_strangers_are_forbidden_from_commute_summary(client, db, people, auth_headers):
    owner = people["owner"]
    flat = make_flat(db, people["tracker"], owner, commutes={owner.id: 25})

    response = client.get(f"{_url(people)}/{flat.id}/commute", headers=auth_headers(people["stranger"]))
    assert response.status_code == 403
    assert response.json() == {"error": "Access denied"}

    anonymous = client.get(f"{_url(people)}/{flat.id}/commute")
    assert anonymous.status_code == 401
