# routers/dependencies.py
"""
Shared FastAPI dependencies: services built around the request's session.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_session
from services.credential_service import CredentialService, get_credential_service
from services.flat_service import FlatService
from services.membership_service import MembershipService
from services.tracker_service import TrackerService
from services.user_service import UserService
from utils.errors import ValidationError
from utils.fields import parse_int


def get_membership_service(db: Session = Depends(get_session)) -> MembershipService:
     return MembershipService(db)


def get_flat_service(db: Session = Depends(get_session)) -> FlatService:
     return FlatService(db)


def get_tracker_service(db: Session = Depends(get_session)) -> TrackerService:
     return TrackerService(db)


def get_user_service(
     db: Session = Depends(get_session),
     credentials: CredentialService = Depends(get_credential_service),
) -> UserService:
     return UserService(db, credentials)


def parse_path_id(value: str, message: str) -> int:
     number = parse_int(value)
     if number is None:
          raise ValidationError(message)
     return number
