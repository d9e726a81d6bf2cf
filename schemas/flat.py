# schemas/flat.py
"""
Pydantic schemas for flat and commute responses.

Flat creation and updates are form-encoded and parsed by FlatService, so
there are no request models here.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from models.flat import FlatStatus

from .user import UserSummary


class CommuteTimeResponse(BaseModel):
     id: int
     user_id: int
     time_minutes: Optional[int] = None
     user: UserSummary

     model_config = ConfigDict(from_attributes=True)


class FlatResponse(BaseModel):
     id: int
     tracker_id: int
     name: str
     description: Optional[str] = None
     url: Optional[str] = None
     address: Optional[str] = None
     latitude: Optional[float] = None
     longitude: Optional[float] = None
     price: Optional[float] = None
     area: Optional[float] = None
     bedrooms: Optional[int] = None
     bathrooms: Optional[int] = None
     status: FlatStatus
     created_by_id: int
     created_at: datetime
     created_by: UserSummary

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 3,
                    "tracker_id": 1,
                    "name": "Calle Mayor 12, 3B",
                    "price": 1250.0,
                    "bedrooms": 2,
                    "status": "Seen",
                    "created_by_id": 1,
                    "created_at": "2026-10-19T10:30:00",
                    "created_by": {"id": 1, "name": "Ana", "email": "ana@example.com"}
               }
          }
     )


class FlatWithCommutes(FlatResponse):
     commute_times: List[CommuteTimeResponse] = []


class CommuteBreakdownEntry(BaseModel):
     user: UserSummary
     minutes: int


class CommuteSummaryResponse(BaseModel):
     flat_id: int
     has_data: bool
     average_minutes: Optional[int] = None
     display: str
     show_average: bool
     breakdown: List[CommuteBreakdownEntry] = []
