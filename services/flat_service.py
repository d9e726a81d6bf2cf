# services/flat_service.py
"""
Flat Record Manager - create, partially update and list flats.

Input arrives as submitted form data (a string mapping). Every field is
validated before anything is written, so a rejected request leaves the
stored flat untouched.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session, joinedload

from models import CommuteTime, Flat, FlatStatus, User
from services.commute_service import CommuteSummary, summarize_commutes
from services.membership_service import MembershipService, TrackerAccess
from utils.errors import AuthorizationError, NotFoundError, ValidationError
from utils.fields import (
     FieldChange,
     number_change,
     optional_number,
     parse_float,
     parse_int,
     raw_value,
     required_int,
     text_change,
)

logger = logging.getLogger(__name__)

COMMUTE_FIELD_PREFIX = "commuteTime_"

TEXT_FIELDS = ("description", "url", "address")

# form key -> (parser, label, minimum, maximum)
NUMERIC_FIELDS = {
     "price": (parse_float, "price", 0, None),
     "area": (parse_float, "area", 0, None),
     "bedrooms": (parse_int, "bedrooms", 0, None),
     "bathrooms": (parse_int, "bathrooms", 0, None),
     "latitude": (parse_float, "latitude", -90, 90),
     "longitude": (parse_float, "longitude", -180, 180),
}


def parse_status(value: Any) -> FlatStatus:
     try:
          return FlatStatus(value)
     except ValueError:
          raise ValidationError("Invalid status value")


def parse_commute_minutes(value: Any) -> Optional[int]:
     """Strictly positive whole minutes, otherwise None (dropped silently)."""
     if value is None:
          return None
     text = str(value).strip()
     if not text:
          return None
     minutes = parse_int(text)
     if minutes is None or minutes <= 0:
          return None
     return minutes


class FlatService:
     """Flat operations scoped to an authorized tracker."""

     def __init__(self, db: Session):
          self.db = db
          self.membership = MembershipService(db)

     def _require_owner(self, access: TrackerAccess, action: str) -> None:
          if not access.is_owner:
               raise AuthorizationError(f"Only the tracker owner can {action} flats")

     def _require_user(self, user_id: int) -> None:
          exists = self.db.query(User.id).filter(User.id == user_id).first()
          if exists is None:
               raise ValidationError("Creator not found")

     # ------------------------------------------------------------------
     # Queries
     # ------------------------------------------------------------------

     def list_flats(self, access: TrackerAccess) -> List[Flat]:
          """Flats of the tracker, newest first, with creator and commute rows loaded."""
          return (
               self.db.query(Flat)
               .options(
                    joinedload(Flat.created_by),
                    joinedload(Flat.commute_times).joinedload(CommuteTime.user),
               )
               .filter(Flat.tracker_id == access.tracker.id)
               .order_by(Flat.created_at.desc(), Flat.id.desc())
               .all()
          )

     def get(self, access: TrackerAccess, flat_id: int) -> Flat:
          flat = (
               self.db.query(Flat)
               .filter(Flat.id == flat_id, Flat.tracker_id == access.tracker.id)
               .first()
          )
          if flat is None:
               raise NotFoundError("Flat not found")
          return flat

     def commute_summary(self, access: TrackerAccess, flat_id: int) -> CommuteSummary:
          flat = self.get(access, flat_id)
          users = self.membership.tracker_users(access.tracker)
          return summarize_commutes(list(flat.commute_times), users)

     # ------------------------------------------------------------------
     # Create
     # ------------------------------------------------------------------

     def collect_commute_times(self, access: TrackerAccess, form: Mapping[str, Any]) -> List[Dict[str, int]]:
          """
          Read commuteTime_<userId> fields for every tracker user.

          Only strictly positive integers become rows; zero, blank or
          invalid values are dropped rather than stored as zero.
          """
          entries = []
          for user in self.membership.tracker_users(access.tracker):
               minutes = parse_commute_minutes(form.get(f"{COMMUTE_FIELD_PREFIX}{user.id}"))
               if minutes is not None:
                    entries.append({"user_id": user.id, "time_minutes": minutes})
          return entries

     def create(self, access: TrackerAccess, form: Mapping[str, Any]) -> Flat:
          self._require_owner(access, "add")

          name = raw_value(form, "name")
          status_raw = raw_value(form, "status")
          created_by_raw = raw_value(form, "createdById")
          if not name or not status_raw or not created_by_raw:
               raise ValidationError("Name, status, and creator are required")

          status = parse_status(status_raw)
          created_by_id = required_int(created_by_raw, "Invalid creator ID")
          self._require_user(created_by_id)

          values = {key: text_change(form, key).resolved() for key in TEXT_FIELDS}
          for key, (parser, label, minimum, maximum) in NUMERIC_FIELDS.items():
               values[key] = optional_number(form, key, parser, label, minimum, maximum)

          flat = Flat(
               tracker_id=access.tracker.id,
               name=name,
               status=status,
               created_by_id=created_by_id,
               **values,
          )
          for entry in self.collect_commute_times(access, form):
               flat.commute_times.append(CommuteTime(**entry))

          self.db.add(flat)
          self.db.flush()
          self.db.refresh(flat)

          logger.info(
               "Flat %s created in tracker %s by user %s with %d commute times",
               flat.id, access.tracker.id, access.user.user_id, len(flat.commute_times)
          )
          return flat

     # ------------------------------------------------------------------
     # Partial update
     # ------------------------------------------------------------------

     def parse_changes(self, form: Mapping[str, Any]) -> Dict[str, FieldChange]:
          """
          Build the change set for an update; absent fields are left out.

          Raises ValidationError on the first invalid field.
          """
          changes: Dict[str, FieldChange] = {}

          name = raw_value(form, "name")
          if name is not None:
               if not name.strip():
                    raise ValidationError("Name cannot be empty")
               changes["name"] = FieldChange.set(name)

          for key in TEXT_FIELDS:
               change = text_change(form, key)
               if not change.is_unset:
                    changes[key] = change

          for key, (parser, label, minimum, maximum) in NUMERIC_FIELDS.items():
               change = number_change(form, key, parser, label, minimum, maximum)
               if not change.is_unset:
                    changes[key] = change

          status_raw = raw_value(form, "status")
          if status_raw is not None:
               changes["status"] = FieldChange.set(parse_status(status_raw))

          created_by_raw = raw_value(form, "createdById")
          if created_by_raw is not None:
               created_by_id = required_int(created_by_raw, "Invalid creator ID")
               self._require_user(created_by_id)
               changes["created_by_id"] = FieldChange.set(created_by_id)

          return changes

     def update(self, access: TrackerAccess, form: Mapping[str, Any]) -> Flat:
          self._require_owner(access, "update")

          flat_id_raw = raw_value(form, "flatId")
          if not flat_id_raw:
               raise ValidationError("Flat ID is required")
          flat_id = required_int(flat_id_raw, "Invalid flat ID")

          flat = self.get(access, flat_id)

          changes = self.parse_changes(form)
          if not changes:
               raise ValidationError("No fields to update")

          for attr, change in changes.items():
               setattr(flat, attr, change.resolved())
          self.db.flush()
          self.db.refresh(flat)

          logger.info(
               "Flat %s in tracker %s updated fields %s",
               flat.id, access.tracker.id, sorted(changes)
          )
          return flat
