# services/session_resolver.py
"""
Session Resolver - establishes the caller's identity for a request.

Missing, invalid, expired and orphaned (user deleted) credentials are all
reported the same way: no identity.
"""
from typing import List, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

import config
from database import get_session
from models import User
from services.credential_service import CredentialService, TokenPayload, get_credential_service
from utils.errors import AuthenticationError


def candidate_tokens(request: Request) -> List[str]:
     """Raw credentials in precedence order: session cookie, then bearer header."""
     tokens = []
     cookie = request.cookies.get(config.SESSION_COOKIE_NAME)
     if cookie:
          tokens.append(cookie)

     auth = request.headers.get("Authorization")
     if auth and auth.startswith("Bearer "):
          bearer = auth.split(" ", 1)[1].strip()
          if bearer:
               tokens.append(bearer)
     return tokens


def read_session(request: Request, credentials: CredentialService) -> Optional[TokenPayload]:
     """
     Payload of the first credential that verifies.

     A stale cookie does not shadow a valid bearer header. Signature and
     expiry only; the database is not consulted.
     """
     for token in candidate_tokens(request):
          payload = credentials.check_token(token)
          if payload is not None:
               return payload
     return None


class SessionResolver:
     """Resolves a raw credential into a TokenPayload backed by a live user."""

     def __init__(self, db: Session, credentials: CredentialService):
          self.db = db
          self.credentials = credentials

     def _confirm(self, payload: Optional[TokenPayload]) -> Optional[TokenPayload]:
          if payload is None:
               return None

          # Verify user still exists in database
          exists = self.db.query(User.id).filter(User.id == payload.user_id).first()
          if exists is None:
               return None
          return payload

     def resolve(self, token: Optional[str]) -> Optional[TokenPayload]:
          return self._confirm(self.credentials.check_token(token))

     def resolve_request(self, request: Request) -> Optional[TokenPayload]:
          return self._confirm(read_session(request, self.credentials))


def get_current_user(
     request: Request,
     db: Session = Depends(get_session),
     credentials: CredentialService = Depends(get_credential_service),
) -> Optional[TokenPayload]:
     """FastAPI dependency: the caller's identity, or None."""
     return SessionResolver(db, credentials).resolve_request(request)


def require_user(user: Optional[TokenPayload] = Depends(get_current_user)) -> TokenPayload:
     """FastAPI dependency: the caller's identity, or 401."""
     if user is None:
          raise AuthenticationError()
     return user
