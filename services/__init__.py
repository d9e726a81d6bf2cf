# services/__init__.py
from .credential_service import CredentialService, TokenPayload, get_credential_service
from .session_resolver import SessionResolver, candidate_tokens, read_session, get_current_user, require_user
from .membership_service import MembershipService, TrackerAccess, TrackerRole, classify
from .tracker_service import TrackerService
from .flat_service import FlatService
from .commute_service import CommuteSummary, CommuteEntry, NO_DATA, average_commute, summarize_commutes
from .user_service import UserService
from .geocoding_service import Coordinates, Unavailable, Geocoder, NominatimGeocoder, get_geocoder

__all__ = [
     "CredentialService",
     "TokenPayload",
     "get_credential_service",
     "SessionResolver",
     "candidate_tokens",
     "read_session",
     "get_current_user",
     "require_user",
     "MembershipService",
     "TrackerAccess",
     "TrackerRole",
     "classify",
     "TrackerService",
     "FlatService",
     "CommuteSummary",
     "CommuteEntry",
     "NO_DATA",
     "average_commute",
     "summarize_commutes",
     "UserService",
     "Coordinates",
     "Unavailable",
     "Geocoder",
     "NominatimGeocoder",
     "get_geocoder",
]
