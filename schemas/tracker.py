# schemas/tracker.py
"""
Pydantic schemas for tracker and participant responses.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from models.tracker_participant import ParticipantRole
from services.membership_service import TrackerRole

from .user import UserSummary, UserLocation


class ParticipantResponse(BaseModel):
     id: int
     tracker_id: int
     user_id: int
     role: ParticipantRole
     user: UserSummary

     model_config = ConfigDict(from_attributes=True)


class ParticipantDetail(ParticipantResponse):
     """Participant with the user's work location (for commute maps)."""
     user: UserLocation


class TrackerResponse(BaseModel):
     id: int
     name: str
     description: Optional[str] = None
     owner_id: int
     created_at: datetime
     owner: UserSummary
     participants: List[ParticipantResponse] = []

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 1,
                    "name": "Madrid 2026",
                    "description": "Two bedrooms near Retiro",
                    "owner_id": 1,
                    "created_at": "2026-10-19T10:30:00",
                    "owner": {"id": 1, "name": "Ana", "email": "ana@example.com"},
                    "participants": []
               }
          }
     )


class TrackerDetailResponse(TrackerResponse):
     """Tracker as seen by one caller."""
     role: TrackerRole
