# routers/auth.py
"""
Authentication API routes: register, login, logout, current session.

Successful login and registration set the session cookie.
"""
from fastapi import APIRouter, Depends, Response, status

import config
from schemas.user import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, SessionResponse, UserSummary
from services.credential_service import TokenPayload
from services.session_resolver import require_user
from services.user_service import UserService

from .dependencies import get_user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])

COOKIE_MAX_AGE = config.TOKEN_LIFETIME_DAYS * 24 * 60 * 60


def set_session_cookie(response: Response, token: str) -> None:
     response.set_cookie(
          key=config.SESSION_COOKIE_NAME,
          value=token,
          max_age=COOKIE_MAX_AGE,
          httponly=True,
          secure=config.secure_cookies(),
          samesite="lax",
          path="/",
     )


@router.post(
     "/login",
     response_model=AuthResponse,
     summary="Log in with email and password"
)
def login(
     body: LoginRequest,
     response: Response,
     users: UserService = Depends(get_user_service),
):
     """
     Verify credentials and start a session.

     Unknown email and wrong password produce the same 401.
     """
     user = users.authenticate(body.email, body.password)
     set_session_cookie(response, users.issue_token(user))
     return AuthResponse(user=UserSummary.model_validate(user))


@router.post(
     "/register",
     response_model=AuthResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an account"
)
def register(
     body: RegisterRequest,
     response: Response,
     users: UserService = Depends(get_user_service),
):
     """
     Register a new user and start a session.

     - **email**: must not already be registered
     - **password**: at least 6 characters
     - **name**: optional display name
     """
     user = users.register(body.email, body.password, body.name)
     set_session_cookie(response, users.issue_token(user))
     return AuthResponse(user=UserSummary.model_validate(user))


@router.post("/logout", response_model=MessageResponse, summary="End the session")
def logout(response: Response):
     response.delete_cookie(
          key=config.SESSION_COOKIE_NAME,
          path="/",
          httponly=True,
          secure=config.secure_cookies(),
          samesite="lax",
     )
     return MessageResponse(message="Logged out")


@router.get("/me", response_model=SessionResponse, summary="Current session")
def me(user: TokenPayload = Depends(require_user)):
     return SessionResponse.model_validate(user)
