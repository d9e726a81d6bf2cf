# services/tracker_service.py
"""
Tracker Service - creating and listing trackers.
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from models import Tracker, TrackerParticipant
from services.credential_service import TokenPayload
from utils.errors import ValidationError

logger = logging.getLogger(__name__)


class TrackerService:

     def __init__(self, db: Session):
          self.db = db

     def create(self, owner: TokenPayload, name: Optional[str], description: Optional[str]) -> Tracker:
          """Any authenticated user may create a tracker and becomes its owner."""
          if not name or not name.strip():
               raise ValidationError("Name is required")

          tracker = Tracker(
               name=name.strip(),
               description=description or None,
               owner_id=owner.user_id,
          )
          self.db.add(tracker)
          self.db.flush()
          self.db.refresh(tracker)

          logger.info("Tracker %s created by user %s", tracker.id, owner.user_id)
          return tracker

     def list_for_user(self, user_id: int) -> List[Tracker]:
          """Trackers the user owns or participates in, newest first."""
          shared = (
               self.db.query(TrackerParticipant.tracker_id)
               .filter(TrackerParticipant.user_id == user_id)
          )
          return (
               self.db.query(Tracker)
               .options(
                    joinedload(Tracker.owner),
                    joinedload(Tracker.participants).joinedload(TrackerParticipant.user),
               )
               .filter(or_(Tracker.owner_id == user_id, Tracker.id.in_(shared)))
               .order_by(Tracker.created_at.desc(), Tracker.id.desc())
               .all()
          )
