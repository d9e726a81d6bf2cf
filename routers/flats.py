# routers/flats.py
"""
Flat API routes, nested under a tracker.

POST and PUT consume form-encoded bodies. The raw form is handed to
FlatService so that an absent field and an empty field stay distinct.
Database work runs in the threadpool; only form parsing is awaited on
the event loop.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool

from schemas.flat import CommuteBreakdownEntry, CommuteSummaryResponse, FlatResponse, FlatWithCommutes
from schemas.user import UserSummary
from services.credential_service import TokenPayload
from services.flat_service import FlatService
from services.session_resolver import require_user

from .dependencies import get_flat_service, parse_path_id

router = APIRouter(prefix="/api/trackers/{tracker_id}/flats", tags=["flats"])


@router.get(
     "",
     response_model=List[FlatWithCommutes],
     summary="List flats of a tracker"
)
def list_flats(
     tracker_id: str,
     user: TokenPayload = Depends(require_user),
     flats: FlatService = Depends(get_flat_service),
):
     """All flats of the tracker, newest first, with creator and commute times."""
     access = flats.membership.authorize(parse_path_id(tracker_id, "Invalid tracker ID"), user)
     return [FlatWithCommutes.model_validate(f) for f in flats.list_flats(access)]


@router.post(
     "",
     response_model=FlatWithCommutes,
     status_code=status.HTTP_201_CREATED,
     summary="Add a flat"
)
async def create_flat(
     tracker_id: str,
     request: Request,
     user: TokenPayload = Depends(require_user),
     flats: FlatService = Depends(get_flat_service),
):
     """
     Add a flat to the tracker (owner only).

     Required: **name**, **status**, **createdById**. Optional text and
     numeric fields may be blank. Commute minutes per tracker user are
     read from **commuteTime_<userId>** fields.
     """
     access = await run_in_threadpool(
          flats.membership.authorize,
          parse_path_id(tracker_id, "Invalid tracker ID"),
          user,
          require_owner=True,
          denied_message="Only the tracker owner can add flats",
     )
     form = await request.form()
     flat = await run_in_threadpool(flats.create, access, form)
     return await run_in_threadpool(FlatWithCommutes.model_validate, flat)


@router.put(
     "",
     response_model=FlatResponse,
     summary="Partially update a flat"
)
async def update_flat(
     tracker_id: str,
     request: Request,
     user: TokenPayload = Depends(require_user),
     flats: FlatService = Depends(get_flat_service),
):
     """
     Update the fields present in the form (owner only).

     **flatId** selects the flat. Absent fields are untouched; empty
     optional fields are cleared.
     """
     access = await run_in_threadpool(
          flats.membership.authorize,
          parse_path_id(tracker_id, "Invalid tracker ID"),
          user,
          require_owner=True,
          denied_message="Only the tracker owner can update flats",
     )
     form = await request.form()
     flat = await run_in_threadpool(flats.update, access, form)
     return await run_in_threadpool(FlatResponse.model_validate, flat)


@router.get(
     "/{flat_id}/commute",
     response_model=CommuteSummaryResponse,
     summary="Average commute for a flat"
)
def get_commute_summary(
     tracker_id: str,
     flat_id: str,
     user: TokenPayload = Depends(require_user),
     flats: FlatService = Depends(get_flat_service),
):
     """Average commute across the tracker's users plus a per-user breakdown."""
     access = flats.membership.authorize(parse_path_id(tracker_id, "Invalid tracker ID"), user)
     parsed_flat_id = parse_path_id(flat_id, "Invalid flat ID")
     summary = flats.commute_summary(access, parsed_flat_id)
     return CommuteSummaryResponse(
          flat_id=parsed_flat_id,
          has_data=summary.has_data,
          average_minutes=summary.average_minutes,
          display=summary.display,
          show_average=summary.show_average,
          breakdown=[
               CommuteBreakdownEntry(user=UserSummary.model_validate(e.user), minutes=e.minutes)
               for e in summary.breakdown
          ],
     )
