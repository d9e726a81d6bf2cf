# services/commute_service.py
"""
Commute Aggregator - average commute time for a flat.

Pure functions over a flat's commute rows and the tracker's users.
A commute of zero or null minutes counts as missing data.
"""
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from models import CommuteTime, User

NO_DATA = "No data"


@dataclass(frozen=True)
class CommuteEntry:
     user: User
     minutes: int


@dataclass(frozen=True)
class CommuteSummary:
     average: Optional[float]
     breakdown: List[CommuteEntry] = field(default_factory=list)

     @property
     def has_data(self) -> bool:
          return self.average is not None

     @property
     def average_minutes(self) -> Optional[int]:
          """Average rounded to the nearest whole minute (halves round up)."""
          if self.average is None:
               return None
          return round_half_up(self.average)

     @property
     def show_average(self) -> bool:
          return len(self.breakdown) > 1

     @property
     def display(self) -> str:
          if self.average is None:
               return NO_DATA
          return f"{self.average_minutes} min"


def round_half_up(value: float) -> int:
     return int(math.floor(value + 0.5))


def is_valid_minutes(minutes: Optional[int]) -> bool:
     return minutes is not None and minutes > 0


def average_commute(commute_times: Iterable[CommuteTime]) -> Optional[float]:
     """Mean of the valid entries, or None when there are none."""
     valid = [ct.time_minutes for ct in commute_times if is_valid_minutes(ct.time_minutes)]
     if not valid:
          return None
     return sum(valid) / len(valid)


def summarize_commutes(commute_times: Sequence[CommuteTime], users: Iterable[User]) -> CommuteSummary:
     average = average_commute(commute_times)
     if average is None:
          return CommuteSummary(average=None)

     breakdown = []
     for user in users:
          entry = next((ct for ct in commute_times if ct.user_id == user.id), None)
          if entry is not None and is_valid_minutes(entry.time_minutes):
               breakdown.append(CommuteEntry(user=user, minutes=entry.time_minutes))
     return CommuteSummary(average=average, breakdown=breakdown)
