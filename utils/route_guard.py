# utils/route_guard.py
"""
Edge-level request filter.

Classifies a path and decides whether to let it through or redirect.
Stateless: only the session token's signature and expiry are checked,
never the database.
"""
import enum
from dataclasses import dataclass
from typing import Optional

PUBLIC_PATHS = frozenset({"/login", "/register", "/api/auth/login", "/api/auth/register"})
AUTH_PAGES = frozenset({"/login", "/register"})

LOGIN_PATH = "/login"
LANDING_PATH = "/trackers"


class PathKind(str, enum.Enum):
     PUBLIC = "public"
     ASSET = "asset"
     API = "api"
     PROTECTED = "protected"


@dataclass(frozen=True)
class GuardDecision:
     redirect_to: Optional[str] = None

     @property
     def passes(self) -> bool:
          return self.redirect_to is None


PASS = GuardDecision()


def classify_path(path: str) -> PathKind:
     if path in PUBLIC_PATHS:
          return PathKind.PUBLIC
     # Build artifacts, auth endpoints and anything that looks like a file
     if path.startswith("/_next") or path.startswith("/api/auth") or "." in path:
          return PathKind.ASSET
     # API handlers answer 401 themselves instead of redirecting
     if path == "/api" or path.startswith("/api/"):
          return PathKind.API
     return PathKind.PROTECTED


def guard_decision(path: str, authenticated: bool) -> GuardDecision:
     kind = classify_path(path)

     if kind is PathKind.PUBLIC:
          if authenticated and path in AUTH_PAGES:
               return GuardDecision(redirect_to=LANDING_PATH)
          return PASS

     if kind is PathKind.PROTECTED and not authenticated:
          return GuardDecision(redirect_to=LOGIN_PATH)

     return PASS
