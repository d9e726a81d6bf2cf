# services/credential_service.py
"""
Credential Service - password hashing and signed session tokens.

Passwords are hashed with bcrypt (12 rounds) through passlib. Session
tokens are HS256 JWTs (python-jose) carrying the user id, email and name,
valid for 7 days.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt
from passlib.context import CryptContext

import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPayload:
     """Identity carried by a session token."""
     user_id: int
     email: str
     name: Optional[str] = None

     def to_claims(self) -> dict:
          return {"user_id": self.user_id, "email": self.email, "name": self.name}


class CredentialService:
     """Stateless helper; one instance can be shared across requests."""

     def __init__(
          self,
          secret: Optional[str] = None,
          algorithm: str = config.JWT_ALGORITHM,
          lifetime: timedelta = timedelta(days=config.TOKEN_LIFETIME_DAYS),
          rounds: int = config.BCRYPT_ROUNDS,
     ):
          self.secret = secret or config.JWT_SECRET
          self.algorithm = algorithm
          self.lifetime = lifetime
          self.pwd_context = CryptContext(
               schemes=["bcrypt"],
               deprecated="auto",
               bcrypt__rounds=rounds,
          )

     # ------------------------------------------------------------------
     # Passwords
     # ------------------------------------------------------------------

     def hash_password(self, password: str) -> str:
          return self.pwd_context.hash(password)

     def verify_password(self, password: str, password_hash: str) -> bool:
          """False on mismatch; a corrupt stored hash is treated as a mismatch."""
          if not password or not password_hash:
               return False
          try:
               return self.pwd_context.verify(password, password_hash)
          except (ValueError, TypeError):
               logger.warning("Stored password hash could not be parsed")
               return False

     # ------------------------------------------------------------------
     # Tokens
     # ------------------------------------------------------------------

     def issue_token(self, payload: TokenPayload, now: Optional[datetime] = None) -> str:
          now = now or datetime.now(timezone.utc)
          claims = payload.to_claims()
          claims["iat"] = int(now.timestamp())
          claims["exp"] = int((now + self.lifetime).timestamp())
          return jwt.encode(claims, self.secret, algorithm=self.algorithm)

     def check_token(self, token: Optional[str]) -> Optional[TokenPayload]:
          """
          Verify signature and expiry.

          Returns None for expired, tampered or malformed tokens; never raises.
          """
          if not token:
               return None
          try:
               claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
          except JWTError:
               return None

          user_id = claims.get("user_id")
          email = claims.get("email")
          if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
               return None
          name = claims.get("name")
          return TokenPayload(user_id=user_id, email=email, name=name if isinstance(name, str) else None)


def get_credential_service(request: Request) -> CredentialService:
     """FastAPI dependency returning the credential service the app was built with."""
     return request.app.state.credentials
