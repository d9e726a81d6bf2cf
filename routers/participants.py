# routers/participants.py
"""
Tracker participant API routes.

Members may list participants; only the owner may add or remove them.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Query, status

from schemas.tracker import ParticipantDetail, ParticipantResponse
from schemas.user import MessageResponse
from services.credential_service import TokenPayload
from services.membership_service import MembershipService
from services.session_resolver import require_user

from .dependencies import get_membership_service, parse_path_id

router = APIRouter(prefix="/api/trackers/{tracker_id}/participants", tags=["participants"])


@router.get(
     "",
     response_model=List[ParticipantDetail],
     summary="List participants"
)
def list_participants(
     tracker_id: str,
     user: TokenPayload = Depends(require_user),
     membership: MembershipService = Depends(get_membership_service),
):
     access = membership.authorize(parse_path_id(tracker_id, "Invalid tracker ID"), user)
     return [ParticipantDetail.model_validate(p) for p in membership.list_participants(access)]


@router.post(
     "",
     response_model=ParticipantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a participant"
)
def add_participant(
     tracker_id: str,
     userId: Optional[str] = Form(None),
     role: Optional[str] = Form(None),
     user: TokenPayload = Depends(require_user),
     membership: MembershipService = Depends(get_membership_service),
):
     """
     Add a user to the tracker (owner only).

     - **userId**: user to add; must exist, must not be the owner or already a participant
     - **role**: Admin or Participant
     """
     access = membership.authorize(
          parse_path_id(tracker_id, "Invalid tracker ID"),
          user,
          require_owner=True,
          denied_message="Only the tracker owner can add participants",
     )
     participant = membership.add_participant(access, userId, role)
     return ParticipantResponse.model_validate(participant)


@router.delete(
     "",
     response_model=MessageResponse,
     summary="Remove a participant"
)
def remove_participant(
     tracker_id: str,
     participantId: Optional[str] = Query(None),
     user: TokenPayload = Depends(require_user),
     membership: MembershipService = Depends(get_membership_service),
):
     """Remove a participant row of this tracker (owner only)."""
     access = membership.authorize(
          parse_path_id(tracker_id, "Invalid tracker ID"),
          user,
          require_owner=True,
          denied_message="Only the tracker owner can remove participants",
     )
     message = membership.remove_participant(access, participantId)
     return MessageResponse(message=message)
