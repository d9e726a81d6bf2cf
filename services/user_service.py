# services/user_service.py
"""
User Service - registration, login, admin user creation and profiles.
"""
import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

import config
from models import User
from services.credential_service import CredentialService, TokenPayload
from utils.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from utils.fields import optional_number, parse_float, raw_value

logger = logging.getLogger(__name__)


def check_password_strength(password: str) -> None:
     if len(password) < config.MIN_PASSWORD_LENGTH:
          raise ValidationError(
               f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters long"
          )


def payload_for(user: User) -> TokenPayload:
     return TokenPayload(user_id=user.id, email=user.email, name=user.name)


class UserService:

     def __init__(self, db: Session, credentials: CredentialService):
          self.db = db
          self.credentials = credentials

     def find_by_email(self, email: str) -> Optional[User]:
          return self.db.query(User).filter(User.email == email).first()

     def get(self, user_id: int) -> User:
          user = self.db.query(User).filter(User.id == user_id).first()
          if user is None:
               raise NotFoundError("User not found")
          return user

     def list_users(self) -> List[User]:
          return self.db.query(User).order_by(User.id).all()

     # ------------------------------------------------------------------
     # Auth
     # ------------------------------------------------------------------

     def register(self, email: Optional[str], password: Optional[str], name: Optional[str] = None) -> User:
          if not email or not password:
               raise ValidationError("Email and password are required")
          check_password_strength(password)

          if self.find_by_email(email) is not None:
               raise ConflictError("A user with this email already exists")

          user = User(
               email=email,
               password_hash=self.credentials.hash_password(password),
               name=name or None,
          )
          self.db.add(user)
          self.db.flush()
          self.db.refresh(user)

          logger.info("User %s registered", user.id)
          return user

     def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
          if not email or not password:
               raise ValidationError("Email and password are required")

          user = self.find_by_email(email)
          # Same message for unknown email and wrong password
          if user is None or not self.credentials.verify_password(password, user.password_hash):
               raise AuthenticationError("Invalid email or password")
          return user

     def issue_token(self, user: User) -> str:
          return self.credentials.issue_token(payload_for(user))

     # ------------------------------------------------------------------
     # Admin creation
     # ------------------------------------------------------------------

     def create_user(self, form: Mapping[str, Any]) -> User:
          """Create a user from a submitted form (email, name, password, work location)."""
          email = raw_value(form, "email")
          name = raw_value(form, "name")
          password = raw_value(form, "password")
          if not email or not name or not password:
               raise ValidationError("Email, name, and password are required")
          check_password_strength(password)

          if self.find_by_email(email) is not None:
               raise ConflictError("User with this email already exists")

          user = User(
               email=email,
               name=name,
               password_hash=self.credentials.hash_password(password),
               work_address=raw_value(form, "work_address") or None,
               work_latitude=optional_number(form, "work_latitude", parse_float, "latitude", -90, 90),
               work_longitude=optional_number(form, "work_longitude", parse_float, "longitude", -180, 180),
          )
          self.db.add(user)
          self.db.flush()
          self.db.refresh(user)

          logger.info("User %s created", user.id)
          return user

     # ------------------------------------------------------------------
     # Profile
     # ------------------------------------------------------------------

     def update_profile(
          self,
          user_id: int,
          email: Optional[str],
          name: Optional[str] = None,
          work_address: Optional[str] = None,
          work_latitude: Optional[float] = None,
          work_longitude: Optional[float] = None,
          password: Optional[str] = None,
     ) -> User:
          """
          Replace the caller's profile fields.

          Email is required; name and work address fall back to NULL when
          blank. A non-empty password is validated and re-hashed.
          """
          user = self.get(user_id)

          if not email:
               raise ValidationError("Email is required")

          existing = self.find_by_email(email)
          if existing is not None and existing.id != user_id:
               raise ConflictError("Email is already taken by another user")

          if work_latitude is not None and not -90 <= work_latitude <= 90:
               raise ValidationError("Invalid latitude value")
          if work_longitude is not None and not -180 <= work_longitude <= 180:
               raise ValidationError("Invalid longitude value")

          password_hash = None
          if password:
               check_password_strength(password)
               password_hash = self.credentials.hash_password(password)

          user.email = email
          user.name = name or None
          user.work_address = work_address or None
          user.work_latitude = work_latitude
          user.work_longitude = work_longitude
          if password_hash is not None:
               user.password_hash = password_hash
          self.db.flush()

          logger.info("User %s updated profile%s", user_id, " and password" if password_hash else "")
          return user
