"""
Admin session endpoints.

``POST /admin/login`` exchanges the admin password for a bearer token,
``GET /admin/verify`` lets the frontend check a stored token on page
load, and ``POST /admin/logout`` revokes it.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import get_auth_service, require_admin
from ...schemas.auth import LoginRequest, LoginResponse, MessageResponse, VerifyResponse
from ...services.auth_service import AuthService


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: Optional[LoginRequest] = None,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Authenticate with the admin password and return a new token.

    Returns 400 when the password is missing and 401 when it is wrong.
    """
    password = credentials.password if credentials is not None else None
    return await auth_service.login(password)


@router.get("/verify", response_model=VerifyResponse)
async def verify(token: str = Depends(require_admin)) -> VerifyResponse:
    """Confirm that the presented token is valid."""
    return VerifyResponse()


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.logout(token)
    return MessageResponse(message="Logged out successfully")
