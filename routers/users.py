# routers/users.py
"""
User API routes: directory, admin creation and the caller's own profile.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool

from schemas.user import ProfileResponse, ProfileUpdate, UserLocation, UserProfile
from services.credential_service import TokenPayload
from services.session_resolver import require_user
from services.user_service import UserService

from .dependencies import get_user_service

router = APIRouter(tags=["users"])


@router.get(
     "/api/users",
     response_model=List[UserLocation],
     summary="List users"
)
def list_users(
     user: TokenPayload = Depends(require_user),
     users: UserService = Depends(get_user_service),
):
     """Users with their work locations, e.g. for choosing participants."""
     return [UserLocation.model_validate(u) for u in users.list_users()]


@router.post(
     "/api/users",
     response_model=UserProfile,
     status_code=status.HTTP_201_CREATED,
     summary="Create a user"
)
async def create_user(
     request: Request,
     user: TokenPayload = Depends(require_user),
     users: UserService = Depends(get_user_service),
):
     """
     Create another user account from a form.

     - **email**, **name**, **password**: required
     - **work_address**, **work_latitude**, **work_longitude**: optional
     """
     form = await request.form()
     created = await run_in_threadpool(users.create_user, form)
     return UserProfile.model_validate(created)


@router.get(
     "/api/user/profile",
     response_model=ProfileResponse,
     summary="Get own profile"
)
def get_profile(
     user: TokenPayload = Depends(require_user),
     users: UserService = Depends(get_user_service),
):
     return ProfileResponse(user=UserProfile.model_validate(users.get(user.user_id)))


@router.put(
     "/api/user/profile",
     response_model=ProfileResponse,
     summary="Update own profile"
)
def update_profile(
     body: ProfileUpdate,
     user: TokenPayload = Depends(require_user),
     users: UserService = Depends(get_user_service),
):
     """
     Replace the caller's profile.

     **email** is required. A non-empty **password** rotates the password.
     """
     updated = users.update_profile(
          user.user_id,
          email=body.email,
          name=body.name,
          work_address=body.work_address,
          work_latitude=body.work_latitude,
          work_longitude=body.work_longitude,
          password=body.password,
     )
     return ProfileResponse(user=UserProfile.model_validate(updated))
