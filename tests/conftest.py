# tests/conftest.py
import asyncio

import pytest
from fastapi.testclient import TestClient

from database import build_engine, build_session_factory, init_db
from main import create_app
from models import CommuteTime, Flat, FlatStatus, ParticipantRole, Tracker, TrackerParticipant, User
from services.credential_service import CredentialService, TokenPayload
from services.geocoding_service import Coordinates, Geocoder, Unavailable

PASSWORD = "secret123"


class FakeGeocoder(Geocoder):
    """Answers from a fixed address book."""

    def __init__(self, known=None):
        self.known = known or {}
        self.calls = []

    def geocode(self, address):
        self.calls.append(address)
        if address in self.known:
            return self.known[address]
        return Unavailable("not_found")


@pytest.fixture(scope="session")
def credentials():
    return CredentialService(secret="test-secret")


@pytest.fixture(scope="session")
def password_hash(credentials):
    # bcrypt at 12 rounds is slow; hash once for all fixture users
    return credentials.hash_password(PASSWORD)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def geocoder():
    return FakeGeocoder({"Calle de Alcalá 1, Madrid": Coordinates(40.4186, -3.6989)})


@pytest.fixture
def app(engine, session_factory, credentials, geocoder):
    return create_app(
        engine=engine,
        session_factory=session_factory,
        credentials=credentials,
        geocoder=geocoder,
        create_tables=False,
    )


@pytest.fixture
def client(app):
    return TestClient(app)


# ----------------------------------------------------------------------
# Data helpers
# ----------------------------------------------------------------------

def make_user(db, email, name=None, password_hash="x", **extra):
    user = User(email=email, name=name, password_hash=password_hash, **extra)
    db.add(user)
    db.commit()
    return user


def make_tracker(db, owner, name="Madrid 2026", description=None):
    tracker = Tracker(name=name, description=description, owner_id=owner.id)
    db.add(tracker)
    db.commit()
    return tracker


def add_member(db, tracker, user, role=ParticipantRole.PARTICIPANT):
    participant = TrackerParticipant(tracker_id=tracker.id, user_id=user.id, role=role)
    db.add(participant)
    db.commit()
    return participant


def make_flat(db, tracker, creator, name="Calle Mayor 12", status=FlatStatus.SEEN, commutes=None, **fields):
    flat = Flat(tracker_id=tracker.id, created_by_id=creator.id, name=name, status=status, **fields)
    for user_id, minutes in (commutes or {}).items():
        flat.commute_times.append(CommuteTime(user_id=user_id, time_minutes=minutes))
    db.add(flat)
    db.commit()
    return flat


def payload(user):
    return TokenPayload(user_id=user.id, email=user.email, name=user.name)


@pytest.fixture
def auth_headers(credentials):
    def _headers(user):
        return {"Authorization": f"Bearer {credentials.issue_token(payload(user))}"}
    return _headers


@pytest.fixture
def people(db, password_hash):
    """Owner, an Admin and a Participant of one tracker, plus a stranger."""
    owner = make_user(db, "owner@example.com", "Olga", password_hash)
    admin = make_user(db, "admin@example.com", "Adrian", password_hash)
    member = make_user(db, "member@example.com", None, password_hash)
    stranger = make_user(db, "stranger@example.com", "Sam", password_hash)
    tracker = make_tracker(db, owner)
    add_member(db, tracker, admin, ParticipantRole.ADMIN)
    add_member(db, tracker, member, ParticipantRole.PARTICIPANT)
    return {
        "owner": owner,
        "admin": admin,
        "member": member,
        "stranger": stranger,
        "tracker": tracker,
    }


def on_event_loop():
    """True when called from inside a running asyncio event loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
