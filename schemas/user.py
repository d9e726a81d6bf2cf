# schemas/user.py
"""
Pydantic schemas for auth, user and profile API request/response validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
     """Request body for POST /api/auth/login."""
     email: Optional[str] = None
     password: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email": "ana@example.com",
                    "password": "secret123"
               }
          }
     )


class RegisterRequest(BaseModel):
     """Request body for POST /api/auth/register."""
     email: Optional[str] = None
     password: Optional[str] = None
     name: Optional[str] = None


class ProfileUpdate(BaseModel):
     """Request body for PUT /api/user/profile."""
     email: Optional[str] = None
     name: Optional[str] = None
     work_address: Optional[str] = None
     work_latitude: Optional[float] = None
     work_longitude: Optional[float] = None
     password: Optional[str] = None


class UserSummary(BaseModel):
     """Minimal user projection embedded in other responses."""
     id: int
     name: Optional[str] = None
     email: str

     model_config = ConfigDict(from_attributes=True)


class UserLocation(UserSummary):
     """User projection including the work location."""
     work_address: Optional[str] = None
     work_latitude: Optional[float] = None
     work_longitude: Optional[float] = None


class UserProfile(UserLocation):
     created_at: datetime


class AuthResponse(BaseModel):
     success: bool = True
     user: UserSummary


class ProfileResponse(BaseModel):
     success: bool = True
     user: UserProfile


class SessionResponse(BaseModel):
     """Identity carried by the caller's session token."""
     user_id: int
     email: str
     name: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
     success: bool = True
     message: str = Field(..., description="Human readable outcome")
