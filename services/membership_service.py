# services/membership_service.py
"""
Tracker Membership Model - who may do what on a tracker.

Every tracker-scoped operation goes through MembershipService.authorize,
which applies the same order of checks everywhere:

1. the caller must be authenticated          (401)
2. the tracker must exist                     (404)
3. the caller must be owner or participant    (403)
4. owner-only operations require the owner    (403)

Participant roles (Admin / Participant) are stored but only grant read
access; every mutation is reserved to the owner.
"""
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from models import Tracker, TrackerParticipant, ParticipantRole, User
from services.credential_service import TokenPayload
from utils.errors import (
     AuthenticationError,
     AuthorizationError,
     ConflictError,
     NotFoundError,
     ValidationError,
)
from utils.fields import parse_int

logger = logging.getLogger(__name__)


class TrackerRole(str, enum.Enum):
     """Caller's derived relation to a tracker."""
     OWNER = "Owner"
     ADMIN = "Admin"
     PARTICIPANT = "Participant"
     STRANGER = "Stranger"


@dataclass
class TrackerAccess:
     """Result of a successful authorization check."""
     tracker: Tracker
     user: TokenPayload
     role: TrackerRole
     participant: Optional[TrackerParticipant] = None

     @property
     def is_owner(self) -> bool:
          return self.role is TrackerRole.OWNER


def classify(tracker: Tracker, user_id: int) -> tuple[TrackerRole, Optional[TrackerParticipant]]:
     """Derive the caller's role from the tracker's owner and participant rows."""
     if tracker.owner_id == user_id:
          return TrackerRole.OWNER, None
     for participant in tracker.participants:
          if participant.user_id == user_id:
               if participant.role == ParticipantRole.ADMIN:
                    return TrackerRole.ADMIN, participant
               return TrackerRole.PARTICIPANT, participant
     return TrackerRole.STRANGER, None


class MembershipService:
     """Authorization and participant management for trackers."""

     def __init__(self, db: Session):
          self.db = db

     # ------------------------------------------------------------------
     # Authorization
     # ------------------------------------------------------------------

     def authorize(
          self,
          tracker_id: int,
          user: Optional[TokenPayload],
          require_owner: bool = False,
          denied_message: str = "Only the tracker owner can perform this action",
     ) -> TrackerAccess:
          if user is None:
               raise AuthenticationError()

          tracker = (
               self.db.query(Tracker)
               .options(joinedload(Tracker.participants))
               .filter(Tracker.id == tracker_id)
               .first()
          )
          if tracker is None:
               raise NotFoundError("Tracker not found")

          role, participant = classify(tracker, user.user_id)
          if role is TrackerRole.STRANGER:
               logger.info("User %s denied access to tracker %s", user.user_id, tracker_id)
               raise AuthorizationError("Access denied")

          if require_owner and role is not TrackerRole.OWNER:
               raise AuthorizationError(denied_message)

          return TrackerAccess(tracker=tracker, user=user, role=role, participant=participant)

     # ------------------------------------------------------------------
     # Queries
     # ------------------------------------------------------------------

     def tracker_users(self, tracker: Tracker) -> List[User]:
          """Owner first, then participant users in insertion order."""
          users = [tracker.owner]
          users.extend(p.user for p in tracker.participants if p.user_id != tracker.owner_id)
          return users

     def list_participants(self, access: TrackerAccess) -> List[TrackerParticipant]:
          return (
               self.db.query(TrackerParticipant)
               .options(joinedload(TrackerParticipant.user))
               .filter(TrackerParticipant.tracker_id == access.tracker.id)
               .order_by(TrackerParticipant.id)
               .all()
          )

     # ------------------------------------------------------------------
     # Mutations (owner only)
     # ------------------------------------------------------------------

     def add_participant(
          self,
          access: TrackerAccess,
          user_id_raw: Optional[str],
          role_raw: Optional[str],
     ) -> TrackerParticipant:
          """
          Add a user to the tracker.

          Raises:
               AuthorizationError: caller is not the owner
               ValidationError: missing or malformed user id / role
               NotFoundError: target user does not exist
               ConflictError: target already participates or owns the tracker
          """
          if not access.is_owner:
               raise AuthorizationError("Only the tracker owner can add participants")

          if not user_id_raw or not role_raw:
               raise ValidationError("User ID and role are required")

          user_id = parse_int(user_id_raw)
          if user_id is None:
               raise ValidationError("Invalid user ID")

          try:
               role = ParticipantRole(role_raw)
          except ValueError:
               raise ValidationError("Invalid role. Must be Admin or Participant")

          user = self.db.query(User).filter(User.id == user_id).first()
          if user is None:
               raise NotFoundError("User not found")

          tracker = access.tracker
          existing = (
               self.db.query(TrackerParticipant)
               .filter(
                    TrackerParticipant.tracker_id == tracker.id,
                    TrackerParticipant.user_id == user_id,
               )
               .first()
          )
          if existing is not None:
               raise ConflictError("User is already a participant in this tracker")

          if user_id == tracker.owner_id:
               raise ConflictError("Cannot add the owner as a participant")

          participant = TrackerParticipant(tracker_id=tracker.id, user_id=user_id, role=role)
          self.db.add(participant)
          try:
               self.db.flush()
          except IntegrityError:
               # Lost a race against a concurrent insert of the same pair
               self.db.rollback()
               raise ConflictError("User is already a participant in this tracker")

          logger.info(
               "User %s added to tracker %s as %s by %s",
               user_id, tracker.id, role.value, access.user.user_id
          )
          return participant

     def remove_participant(self, access: TrackerAccess, participant_id_raw: Optional[str]) -> str:
          """
          Remove a participant row belonging to this tracker.

          Returns the removal message naming the user.
          """
          if not access.is_owner:
               raise AuthorizationError("Only the tracker owner can remove participants")

          if not participant_id_raw:
               raise ValidationError("Participant ID is required")

          participant_id = parse_int(participant_id_raw)
          if participant_id is None:
               raise ValidationError("Invalid participant ID")

          participant = (
               self.db.query(TrackerParticipant)
               .options(joinedload(TrackerParticipant.user))
               .filter(TrackerParticipant.id == participant_id)
               .first()
          )
          if participant is None or participant.tracker_id != access.tracker.id:
               raise NotFoundError("Participant not found")

          label = participant.user.display_name
          self.db.delete(participant)
          self.db.flush()

          logger.info(
               "Participant %s (user %s) removed from tracker %s",
               participant_id, participant.user_id, access.tracker.id
          )
          return f"{label} has been removed from the tracker"
