# tests/test_flat_service.py
import pytest

from models import CommuteTime, Flat, FlatStatus
from services.flat_service import FlatService
from services.membership_service import MembershipService
from utils.errors import AuthorizationError, NotFoundError, ValidationError

from conftest import make_flat, make_tracker, make_user, payload


@pytest.fixture
def flats(db):
    return FlatService(db)


@pytest.fixture
def owner_access(db, people):
    return MembershipService(db).authorize(people["tracker"].id, payload(people["owner"]))


def _reload(db, flat_id):
    db.expire_all()
    return db.get(Flat, flat_id)


def test_create_requires_name_status_and_creator(flats, owner_access, people):
    with pytest.raises(ValidationError, match="required"):
        flats.create(owner_access, {"name": "Flat", "status": "Seen"})
    with pytest.raises(ValidationError, match="Invalid status"):
        flats.create(owner_access, {"name": "Flat", "status": "Sold", "createdById": str(people["owner"].id)})
    with pytest.raises(ValidationError, match="Creator not found"):
        flats.create(owner_access, {"name": "Flat", "status": "Seen", "createdById": "9999"})


def test_create_defaults_blank_optionals_to_null(flats, owner_access, people, db):
    flat = flats.create(owner_access, {
        "name": "Calle Mayor 12",
        "status": "Seen",
        "createdById": str(people["owner"].id),
        "price": "",
        "description": "",
        "bedrooms": "2",
        "area": "71.5",
    })
    db.commit()

    stored = _reload(db, flat.id)
    assert stored.price is None
    assert stored.description is None
    assert stored.bedrooms == 2
    assert stored.area == 71.5
    assert stored.status is FlatStatus.SEEN


def test_create_rejects_negative_numbers(flats, owner_access, people):
    with pytest.raises(ValidationError, match="Invalid price value"):
        flats.create(owner_access, {
            "name": "Flat", "status": "Seen", "createdById": str(people["owner"].id), "price": "-1",
        })


def test_create_keeps_only_positive_commute_minutes(flats, owner_access, people, db):
    owner, admin, member, stranger = (people[k] for k in ("owner", "admin", "member", "stranger"))
    flat = flats.create(owner_access, {
        "name": "Calle Mayor 12",
        "status": "Seen",
        "createdById": str(owner.id),
        f"commuteTime_{owner.id}": "25",
        f"commuteTime_{admin.id}": "0",
        f"commuteTime_{member.id}": "soon",
        f"commuteTime_{stranger.id}": "15",
    })
    db.commit()

    rows = db.query(CommuteTime).filter_by(flat_id=flat.id).all()
    assert [(r.user_id, r.time_minutes) for r in rows] == [(owner.id, 25)]


def test_participants_cannot_create_or_update(db, flats, people):
    access = MembershipService(db).authorize(people["tracker"].id, payload(people["admin"]))
    with pytest.raises(AuthorizationError):
        flats.create(access, {"name": "Flat", "status": "Seen", "createdById": str(people["admin"].id)})
    with pytest.raises(AuthorizationError):
        flats.update(access, {"flatId": "1", "status": "Accepted"})


def test_update_with_no_fields_is_rejected(flats, owner_access, people):
    flat = make_flat(flats.db, people["tracker"], people["owner"])
    with pytest.raises(ValidationError, match="No fields to update"):
        flats.update(owner_access, {"flatId": str(flat.id)})


def test_update_price_tri_state(flats, owner_access, people, db):
    flat = make_flat(db, people["tracker"], people["owner"], price=900.0, area=60.0)

    with pytest.raises(ValidationError, match="Invalid price value"):
        flats.update(owner_access, {"flatId": str(flat.id), "price": "-5"})
    assert _reload(db, flat.id).price == 900.0

    flats.update(owner_access, {"flatId": str(flat.id), "area": "65"})
    db.commit()
    stored = _reload(db, flat.id)
    assert stored.price == 900.0
    assert stored.area == 65.0

    flats.update(owner_access, {"flatId": str(flat.id), "price": ""})
    db.commit()
    assert _reload(db, flat.id).price is None


def test_update_rejects_whitespace_numbers(flats, owner_access, people, db):
    flat = make_flat(db, people["tracker"], people["owner"], price=900.0, bedrooms=2)

    with pytest.raises(ValidationError, match="Invalid price value"):
        flats.update(owner_access, {"flatId": str(flat.id), "price": "   "})
    with pytest.raises(ValidationError, match="Invalid bedrooms value"):
        flats.update(owner_access, {"flatId": str(flat.id), "bedrooms": " "})

    db.rollback()
    stored = _reload(db, flat.id)
    assert stored.price == 900.0
    assert stored.bedrooms == 2


def test_update_rejects_non_numeric_values(flats, owner_access, people):
    flat = make_flat(flats.db, people["tracker"], people["owner"])
    for field in ("price", "area", "bedrooms", "bathrooms"):
        with pytest.raises(ValidationError, match=f"Invalid {field} value"):
            flats.update(owner_access, {"flatId": str(flat.id), field: "lots"})


def test_update_clears_optional_text(flats, owner_access, people, db):
    flat = make_flat(db, people["tracker"], people["owner"], description="Sunny", url="https://example.com/1")
    flats.update(owner_access, {"flatId": str(flat.id), "description": ""})
    db.commit()

    stored = _reload(db, flat.id)
    assert stored.description is None
    assert stored.url == "https://example.com/1"


def test_update_validates_before_writing(flats, owner_access, people, db):
    flat = make_flat(db, people["tracker"], people["owner"], name="Original")
    with pytest.raises(ValidationError):
        flats.update(owner_access, {"flatId": str(flat.id), "name": "Renamed", "status": "Unknown"})
    db.rollback()
    assert _reload(db, flat.id).name == "Original"


def test_update_rejects_blank_name_and_unknown_creator(flats, owner_access, people):
    flat = make_flat(flats.db, people["tracker"], people["owner"])
    with pytest.raises(ValidationError, match="Name cannot be empty"):
        flats.update(owner_access, {"flatId": str(flat.id), "name": "  "})
    with pytest.raises(ValidationError, match="Creator not found"):
        flats.update(owner_access, {"flatId": str(flat.id), "createdById": "9999"})
    with pytest.raises(ValidationError, match="Invalid creator ID"):
        flats.update(owner_access, {"flatId": str(flat.id), "createdById": "me"})


def test_update_requires_flat_id(flats, owner_access):
    with pytest.raises(ValidationError, match="Flat ID is required"):
        flats.update(owner_access, {"status": "Seen"})
    with pytest.raises(ValidationError, match="Invalid flat ID"):
        flats.update(owner_access, {"flatId": "abc", "status": "Seen"})


def test_cross_tracker_update_is_not_found(flats, owner_access, people, db, password_hash):
    other_owner = make_user(db, "other@example.com", "Other", password_hash)
    other_tracker = make_tracker(db, other_owner, name="Barcelona")
    foreign = make_flat(db, other_tracker, other_owner)

    with pytest.raises(NotFoundError):
        flats.update(owner_access, {"flatId": str(foreign.id), "status": "Accepted"})


def test_status_round_trip_changes_nothing_else(flats, owner_access, people, db):
    flat = make_flat(
        db, people["tracker"], people["owner"],
        price=1200.0, bedrooms=3, address="Calle Mayor 12", status=FlatStatus.SEEN,
    )
    flats.update(owner_access, {"flatId": str(flat.id), "status": "Accepted"})
    db.commit()

    listed = flats.list_flats(owner_access)
    assert len(listed) == 1
    stored = listed[0]
    assert stored.status is FlatStatus.ACCEPTED
    assert (stored.name, stored.price, stored.bedrooms, stored.address) == ("Calle Mayor 12", 1200.0, 3, "Calle Mayor 12")


def test_list_newest_first_with_creator(flats, owner_access, people, db):
    first = make_flat(db, people["tracker"], people["owner"], name="First")
    second = make_flat(db, people["tracker"], people["admin"], name="Second")

    listed = flats.list_flats(owner_access)
    assert [f.id for f in listed] == [second.id, first.id]
    assert listed[0].created_by.email == "admin@example.com"


def test_commute_summary_for_flat(flats, owner_access, people, db):
    owner, admin, member = people["owner"], people["admin"], people["member"]
    flat = make_flat(db, people["tracker"], owner, commutes={owner.id: 10, admin.id: 20, member.id: 30})

    summary = flats.commute_summary(owner_access, flat.id)
    assert summary.average_minutes == 20
    assert [e.user.id for e in summary.breakdown] == [owner.id, admin.id, member.id]
