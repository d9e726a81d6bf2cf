# routers/trackers.py
"""
Tracker API routes.

Any authenticated user may create a tracker (and owns it). Listing only
returns trackers the caller owns or participates in.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, status

from schemas.tracker import TrackerDetailResponse, TrackerResponse
from services.credential_service import TokenPayload
from services.membership_service import MembershipService
from services.session_resolver import require_user
from services.tracker_service import TrackerService

from .dependencies import get_membership_service, get_tracker_service, parse_path_id

router = APIRouter(prefix="/api/trackers", tags=["trackers"])


@router.get(
     "",
     response_model=List[TrackerResponse],
     summary="List the caller's trackers"
)
def list_trackers(
     user: TokenPayload = Depends(require_user),
     trackers: TrackerService = Depends(get_tracker_service),
):
     """Trackers owned by or shared with the caller, newest first."""
     return [TrackerResponse.model_validate(t) for t in trackers.list_for_user(user.user_id)]


@router.post(
     "",
     response_model=TrackerResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a tracker"
)
def create_tracker(
     name: Optional[str] = Form(None),
     description: Optional[str] = Form(None),
     user: TokenPayload = Depends(require_user),
     trackers: TrackerService = Depends(get_tracker_service),
):
     """
     Create a tracker owned by the caller.

     - **name**: required
     - **description**: optional
     """
     tracker = trackers.create(user, name, description)
     return TrackerResponse.model_validate(tracker)


@router.get(
     "/{tracker_id}",
     response_model=TrackerDetailResponse,
     summary="Get a tracker"
)
def get_tracker(
     tracker_id: str,
     user: TokenPayload = Depends(require_user),
     membership: MembershipService = Depends(get_membership_service),
):
     """Tracker with owner, participants and the caller's role. Members only."""
     access = membership.authorize(parse_path_id(tracker_id, "Invalid tracker ID"), user)
     tracker = TrackerResponse.model_validate(access.tracker)
     return TrackerDetailResponse(**tracker.model_dump(), role=access.role)
