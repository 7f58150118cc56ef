"""
Pydantic models for the admin login/verify/logout endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    # Optional so that a missing password yields 400 "Password is
    # required" from the service instead of a generic parsing error.
    password: Optional[str] = Field(None, examples=["secret"])


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    expires_at: str


class VerifyResponse(BaseModel):
    success: bool = True
    status: str = "valid"
    message: str = "Token is valid"


class MessageResponse(BaseModel):
    success: bool = True
    message: str
