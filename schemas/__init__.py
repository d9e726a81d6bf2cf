# schemas/__init__.py
from .user import (
     LoginRequest,
     RegisterRequest,
     ProfileUpdate,
     UserSummary,
     UserLocation,
     UserProfile,
     AuthResponse,
     ProfileResponse,
     SessionResponse,
     MessageResponse,
)
from .tracker import (
     ParticipantResponse,
     ParticipantDetail,
     TrackerResponse,
     TrackerDetailResponse,
)
from .flat import (
     CommuteTimeResponse,
     FlatResponse,
     FlatWithCommutes,
     CommuteBreakdownEntry,
     CommuteSummaryResponse,
)
from .geocode import CoordinatesResponse

__all__ = [
     "LoginRequest",
     "RegisterRequest",
     "ProfileUpdate",
     "UserSummary",
     "UserLocation",
     "UserProfile",
     "AuthResponse",
     "ProfileResponse",
     "SessionResponse",
     "MessageResponse",
     "ParticipantResponse",
     "ParticipantDetail",
     "TrackerResponse",
     "TrackerDetailResponse",
     "CommuteTimeResponse",
     "FlatResponse",
     "FlatWithCommutes",
     "CommuteBreakdownEntry",
     "CommuteSummaryResponse",
     "CoordinatesResponse",
]
