# models/__init__.py
from .base import Base
from .user import User
from .tracker import Tracker
from .tracker_participant import TrackerParticipant, ParticipantRole
from .flat import Flat, FlatStatus
from .commute_time import CommuteTime

__all__ = [
     "Base",
     "User",
     "Tracker",
     "TrackerParticipant",
     "ParticipantRole",
     "Flat",
     "FlatStatus",
     "CommuteTime",
]
